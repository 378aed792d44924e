"""Corpus rebuild endpoints.

Routes
------
GET /rescrape         Scrape the site again and replace the corpus
GET /force-refresh    Delete the corpus first, then scrape unconditionally

Both run the build synchronously and answer once it has been persisted.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from sitechat.corpus.builder import CorpusBuilder
from sitechat.corpus.models import Corpus

router = APIRouter()


def _build_response(builder: CorpusBuilder, corpus: Corpus, message: str) -> dict[str, Any]:
    modified = builder.store.modified_at()
    return {
        "status": "success",
        "message": message,
        "dataFile": builder.store.location,
        "dataLength": corpus.length,
        "source": corpus.source,
        "pagesScraped": sum(1 for page in corpus.pages if page.ok),
        "lastUpdated": modified.isoformat() if modified is not None else None,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def _run_build(request: Request, discard_existing: bool, message: str) -> Any:
    builder: CorpusBuilder = request.app.state.builder
    try:
        corpus = await builder.build(discard_existing=discard_existing)
    except Exception as exc:
        print(f"[CORPUS] ✗ Rebuild failed: {exc!r}")
        return JSONResponse(
            status_code=500, content={"status": "error", "message": str(exc)}
        )
    return _build_response(builder, corpus, message)


@router.get("/rescrape", response_model=None)
async def rescrape_endpoint(request: Request) -> Any:
    """Re-scrape the configured pages and overwrite the corpus."""
    print("[CORPUS] Manual re-scrape requested")
    return await _run_build(request, False, "Website re-scraped successfully")


@router.get("/force-refresh", response_model=None)
async def force_refresh_endpoint(request: Request) -> Any:
    """Discard the stored corpus and rebuild it from scratch."""
    print("[CORPUS] Force refresh requested")
    return await _run_build(
        request, True, "Force refresh completed - fresh data scraped"
    )
