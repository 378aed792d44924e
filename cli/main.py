"""SiteChat CLI — operator entry-point for the corpus and the chat model.

Usage:
    python cli/main.py --help

Commands:
    scrape    → rebuild the corpus from the configured pages
    show      → print corpus stats and a preview
    extract   → fetch one page and print its extracted text
    ask       → answer a question from the cached corpus
    serve     → run the HTTP API with uvicorn
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from sitechat.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
from typing import Optional

import typer

from sitechat.config import settings
from sitechat.corpus.builder import CorpusBuilder
from sitechat.corpus.store import FileCorpusStore, read_usable

app = typer.Typer(
    name="sitechat",
    help="SiteChat backend CLI.",
    no_args_is_help=True,
)

_PREVIEW_CHARS = 500


def _store() -> FileCorpusStore:
    return FileCorpusStore(settings.data_file)


# ---------------------------------------------------------------------------
# Corpus commands
# ---------------------------------------------------------------------------
@app.command("scrape")
def scrape(
    force: bool = typer.Option(False, "--force", help="Delete the cached corpus first."),
) -> None:
    """Scrape the configured pages and overwrite the cached corpus."""
    builder = CorpusBuilder.from_settings(settings, _store())
    typer.echo(f"[scrape] Scraping {len(builder.urls)} page(s) …")
    corpus = asyncio.run(builder.build(discard_existing=force))
    scraped = sum(1 for page in corpus.pages if page.ok)
    typer.echo(f"[scrape] Pages  : {scraped}/{len(builder.urls)}")
    typer.echo(f"[scrape] Source : {corpus.source}")
    typer.echo(f"[scrape] Chars  : {corpus.length}")
    typer.echo(f"[scrape] Saved  : {builder.store.location}")


@app.command("show")
def show(
    full: bool = typer.Option(False, "--full", help="Print the whole corpus."),
) -> None:
    """Print the cached corpus size and a preview."""
    store = _store()
    if not store.exists():
        typer.echo(f"[show] No corpus found at {store.location}.")
        raise typer.Exit(1)

    text = store.read()
    usable = len(text) > settings.min_corpus_chars
    typer.echo(f"[show] File   : {store.location}")
    typer.echo(f"[show] Chars  : {len(text)}")
    typer.echo(f"[show] Usable : {'yes' if usable else 'no'}")
    typer.echo("")
    typer.echo(text if full else text[:_PREVIEW_CHARS] + "...")


@app.command("extract")
def extract(
    url: str = typer.Option(..., help="URL to fetch."),
) -> None:
    """Fetch one page and print the text the corpus builder would keep."""
    from sitechat.scraper import extract_text, fetch_url, make_client

    async def _run() -> str:
        async with make_client(settings.request_timeout) as client:
            return await fetch_url(client, url, settings.request_timeout)

    typer.echo(f"[extract] Fetching {url!r} …")
    html = asyncio.run(_run())
    if not html:
        typer.echo("[extract] Nothing fetched.")
        raise typer.Exit(1)

    text = extract_text(html)
    typer.echo(f"[extract] Chars  : {len(text)}")
    typer.echo("")
    typer.echo(text)


# ---------------------------------------------------------------------------
# Chat commands
# ---------------------------------------------------------------------------
@app.command("ask")
def ask(
    question: str = typer.Option(..., help="Question about the site."),
) -> None:
    """Answer a question from the cached corpus."""
    from sitechat.errors import ChatError
    from sitechat.rag.answer import AnswerGenerator

    corpus = read_usable(_store(), settings.min_corpus_chars)
    if corpus is None:
        typer.echo("[ask] No usable corpus; run `scrape` first.")
        raise typer.Exit(1)

    generator = AnswerGenerator.from_settings(settings)
    try:
        answer = asyncio.run(generator.answer(question, corpus))
    except ChatError as exc:
        typer.echo(f"[ask] {exc.message}")
        raise typer.Exit(1) from exc
    typer.echo(answer)


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: HOST)."),
    port: Optional[int] = typer.Option(None, help="Listen port (default: PORT)."),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    bind_host = host or settings.host
    bind_port = port or settings.port
    typer.echo(f"[serve] Listening on http://{bind_host}:{bind_port}")
    uvicorn.run("sitechat.api.app:app", host=bind_host, port=bind_port)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
