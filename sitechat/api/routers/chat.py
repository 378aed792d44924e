"""Question-answering endpoint.

Routes
------
POST /chat    Body: {"message": "..."}    → {"answer": "..."} | {"error": "..."}

Validation failures answer 400 and never reach the chat model.  While the
corpus is missing or too short the endpoint answers 200 with a placeholder.
"""

from __future__ import annotations

import asyncio
from typing import Any

from fastapi import APIRouter, Request
from pydantic import BaseModel

from sitechat.errors import ChatError, CompletionUnavailableError, InvalidChatRequest

router = APIRouter()

MAX_MESSAGE_CHARS = 500

STILL_LOADING = "I'm still loading website information. Please try again in a moment."
NOT_ENOUGH_DATA = (
    "I don't have enough website information loaded. "
    "Please try again later or contact support."
)


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class ChatResponse(BaseModel):
    answer: str


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _read_message(request: Request) -> str:
    """Return the validated ``message`` field of the JSON body.

    Raises:
        InvalidChatRequest: If the body is not a JSON object, or the message
            is missing, not a string, empty, or too long.
    """
    try:
        payload: Any = await request.json()
    except ValueError as exc:
        raise InvalidChatRequest() from exc

    message = payload.get("message") if isinstance(payload, dict) else None
    if not message or not isinstance(message, str):
        raise InvalidChatRequest()
    if len(message) > MAX_MESSAGE_CHARS:
        raise InvalidChatRequest(
            f"Message too long (max {MAX_MESSAGE_CHARS} characters)"
        )
    return message


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("/chat", response_model=ChatResponse)
async def chat_endpoint(request: Request) -> ChatResponse:
    """Answer a question about the site from the cached corpus."""
    message = await _read_message(request)
    store = request.app.state.store
    settings = request.app.state.settings

    try:
        corpus = await asyncio.to_thread(store.read)
    except FileNotFoundError:
        print("[CHAT] ✗ Corpus not found during chat request")
        return ChatResponse(answer=STILL_LOADING)
    except OSError as exc:
        print(f"[CHAT] ✗ Could not read corpus: {exc!r}")
        raise CompletionUnavailableError() from exc

    if len(corpus) <= settings.min_corpus_chars:
        print(f"[CHAT] ✗ Corpus too short: {len(corpus)} chars")
        return ChatResponse(answer=NOT_ENOUGH_DATA)

    print(f"[CHAT] Processing question {message!r} (corpus: {len(corpus)} chars)")
    try:
        answer = await request.app.state.answerer.answer(message, corpus)
    except ChatError:
        raise
    except Exception as exc:
        print(f"[CHAT] ✗ Unexpected failure: {exc!r}")
        raise CompletionUnavailableError() from exc

    print(f"[CHAT] ✓ Response generated: {answer[:100]}...")
    return ChatResponse(answer=answer)
