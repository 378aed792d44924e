"""Status and inspection endpoints.

Routes
------
GET /health       Liveness plus corpus / credential summary (always 200)
GET /debug        Corpus metadata and a preview (``?full=true`` for all text)
GET /view-data    HTML rendering of the corpus for human inspection
"""

from __future__ import annotations

import html
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

router = APIRouter()

_PREVIEW_CHARS = 500
_RECENT_MINUTES = 10


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _now() -> datetime:
    return datetime.now(timezone.utc)


def _age_minutes(modified: datetime | None) -> int | None:
    if modified is None:
        return None
    return int((_now() - modified).total_seconds() // 60)


def _iso(moment: datetime | None) -> str | None:
    return moment.isoformat() if moment is not None else None


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/health")
def health_endpoint(request: Request) -> dict[str, Any]:
    """Report process liveness, corpus presence and credential configuration."""
    store = request.app.state.store
    settings = request.app.state.settings

    has_data = store.exists()
    data_size = 0
    file_age = None
    if has_data:
        try:
            data_size = len(store.read())
            file_age = _age_minutes(store.modified_at())
        except FileNotFoundError:
            has_data = False

    return {
        "status": "ok",
        "timestamp": _now().isoformat(),
        "dataFile": store.location,
        "hasData": has_data,
        "dataSize": data_size,
        "fileAgeMinutes": file_age,
        "openaiConfigured": settings.openai_configured,
    }


@router.get("/debug")
def debug_endpoint(request: Request, full: bool = False) -> dict[str, Any]:
    """Describe the stored corpus; include the whole text when ``full`` is set."""
    store = request.app.state.store
    settings = request.app.state.settings

    try:
        text = store.read()
    except FileNotFoundError:
        return {
            "status": "error",
            "message": "Corpus file not found",
            "dataFile": store.location,
        }
    except OSError as exc:
        return {"status": "error", "message": str(exc), "dataFile": store.location}

    modified = store.modified_at()
    age = _age_minutes(modified)
    body: dict[str, Any] = {
        "status": "success",
        "dataFile": store.location,
        "dataLength": len(text),
        "lastModified": _iso(modified),
        "fileAgeMinutes": age,
        "isRecentFile": age is not None and age < _RECENT_MINUTES,
        "hasContent": len(text) > settings.min_corpus_chars,
    }
    if full:
        body["fullContent"] = text
    else:
        body["preview"] = text[:_PREVIEW_CHARS] + "..."
    return body


@router.get("/view-data", response_class=HTMLResponse)
def view_data_endpoint(request: Request) -> HTMLResponse:
    """Render the corpus as an escaped, pre-wrapped HTML page."""
    store = request.app.state.store
    location = html.escape(store.location)

    try:
        text = store.read()
    except FileNotFoundError:
        return HTMLResponse(f"<h1>No data file found at: {location}</h1>")
    except OSError as exc:
        return HTMLResponse(f"<h1>Error: {html.escape(str(exc))}</h1>")

    modified = _iso(store.modified_at()) or "unknown"
    page = f"""\
<html>
  <head><title>Scraped Website Data</title></head>
  <body style="font-family: Arial; max-width: 800px; margin: 0 auto; padding: 20px;">
    <h1>Scraped Website Content</h1>
    <p><strong>File Path:</strong> {location}</p>
    <p><strong>Total Length:</strong> {len(text)} characters</p>
    <p><strong>Last Modified:</strong> {modified}</p>
    <hr>
    <div style="white-space: pre-wrap; background: #f5f5f5; padding: 20px; border-radius: 5px;">{html.escape(text)}</div>
  </body>
</html>
"""
    return HTMLResponse(page)
