"""FastAPI application factory.

Lifespan
--------
On startup the app resolves the answer generator (failing fast when no
``OPENAI_API_KEY`` is configured) and, unless disabled, schedules a background
corpus build when the store holds no usable corpus.  Requests are served
immediately; ``/chat`` answers with a placeholder until the corpus exists.

Routers
-------
    /health, /debug, /view-data    — status and inspection of the corpus
    /rescrape, /force-refresh      — on-demand corpus rebuilds
    /chat                          — question answering
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager, suppress
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sitechat.config import Settings, settings as default_settings
from sitechat.corpus.builder import CorpusBuilder
from sitechat.corpus.fallback import LAST_RESORT_TEXT
from sitechat.corpus.store import CorpusStore, FileCorpusStore
from sitechat.errors import ChatError
from sitechat.rag.answer import AnswerGenerator

from sitechat.api.routers import chat as chat_router
from sitechat.api.routers import corpus as corpus_router
from sitechat.api.routers import status as status_router


async def _initialise_corpus(builder: CorpusBuilder) -> None:
    """Build the corpus in the background if the store has none worth using.

    If the build fails, a minimal site description is written in its place so
    ``/chat`` can still answer something.
    """
    try:
        await builder.ensure()
    except Exception as exc:  # noqa: BLE001
        print(f"[STARTUP] ✗ Corpus initialisation failed: {exc}")
        try:
            await asyncio.to_thread(builder.store.write, LAST_RESORT_TEXT)
        except Exception as write_exc:  # noqa: BLE001
            print(f"[STARTUP] ✗ Could not write fallback corpus: {write_exc}")
        else:
            print(f"[STARTUP] Wrote fallback corpus to {builder.store.location}")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Resolve the answer generator and kick off the initial corpus build."""
    state = app.state
    if state.answerer is None:
        state.answerer = AnswerGenerator.from_settings(state.settings)

    print(f"[STARTUP] Corpus location: {state.store.location}")
    task: asyncio.Task | None = None
    if state.scrape_on_startup:
        task = asyncio.create_task(_initialise_corpus(state.builder))
    try:
        yield
    finally:
        if task is not None and not task.done():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task


async def _chat_error_handler(request: Request, exc: ChatError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def create_app(
    settings: Settings | None = None,
    store: CorpusStore | None = None,
    builder: CorpusBuilder | None = None,
    answerer: AnswerGenerator | None = None,
    scrape_on_startup: bool = True,
) -> FastAPI:
    """Return a fully-configured FastAPI application instance.

    Collaborators default to the ones described by *settings*; tests inject
    an in-memory store, a builder with fake fetches and a stub answerer.
    """
    settings = settings or default_settings
    if store is None:
        store = builder.store if builder is not None else FileCorpusStore(settings.data_file)
    if builder is None:
        builder = CorpusBuilder.from_settings(settings, store)

    app = FastAPI(
        title="SiteChat API",
        description=(
            "Website Q&A backend: scrapes a fixed set of pages into a text "
            "corpus and answers questions about them with a chat model."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.builder = builder
    app.state.answerer = answerer
    app.state.scrape_on_startup = scrape_on_startup

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ChatError, _chat_error_handler)

    app.include_router(status_router.router, tags=["status"])
    app.include_router(corpus_router.router, tags=["corpus"])
    app.include_router(chat_router.router, tags=["chat"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn sitechat.api.app:app --port 3000
app = create_app()
