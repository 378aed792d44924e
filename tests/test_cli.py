"""Tests for the SiteChat CLI."""

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import respx
from typer.testing import CliRunner

from cli.main import app
from sitechat.corpus.fallback import FALLBACK_TEXT
from sitechat.corpus.store import FileCorpusStore

runner = CliRunner()

_CORPUS = "\n\n=== PAGE: https://site.example/ ===\n" + "We host weekly webinars. " * 10


@pytest.fixture
def data_dir(tmp_path, monkeypatch) -> Path:
    """Point the CLI's corpus file at a temp directory with no target pages."""
    monkeypatch.setattr("sitechat.config.settings.data_dir", tmp_path)
    monkeypatch.setattr("sitechat.config.settings.site_urls", [])
    return tmp_path


def test_scrape_with_no_pages_writes_fallback(data_dir):
    result = runner.invoke(app, ["scrape"])
    assert result.exit_code == 0
    assert "fallback" in result.stdout
    assert (data_dir / "siteData.txt").read_text(encoding="utf-8") == FALLBACK_TEXT


def test_scrape_force_replaces_existing(data_dir):
    FileCorpusStore(data_dir / "siteData.txt").write("old " * 50)
    result = runner.invoke(app, ["scrape", "--force"])
    assert result.exit_code == 0
    assert (data_dir / "siteData.txt").read_text(encoding="utf-8") == FALLBACK_TEXT


def test_show_without_corpus_fails(data_dir):
    result = runner.invoke(app, ["show"])
    assert result.exit_code == 1
    assert "No corpus found" in result.stdout


def test_show_prints_stats(data_dir):
    FileCorpusStore(data_dir / "siteData.txt").write(_CORPUS)
    result = runner.invoke(app, ["show", "--full"])
    assert result.exit_code == 0
    assert f"Chars  : {len(_CORPUS)}" in result.stdout
    assert "Usable : yes" in result.stdout
    assert "=== PAGE: https://site.example/ ===" in result.stdout


def test_extract_prints_page_text(data_dir):
    html = "<html><body><main><p>" + "Founder coaching and webinars. " * 10 + "</p></main></body></html>"
    with respx.mock:
        respx.get("https://site.example/").mock(return_value=httpx.Response(200, text=html))
        result = runner.invoke(app, ["extract", "--url", "https://site.example/"])
    assert result.exit_code == 0
    assert "Founder coaching and webinars." in result.stdout


def test_extract_failed_fetch_exits_1(data_dir):
    with respx.mock:
        respx.get("https://site.example/").mock(return_value=httpx.Response(404))
        result = runner.invoke(app, ["extract", "--url", "https://site.example/"])
    assert result.exit_code == 1


def test_ask_without_corpus_fails(data_dir):
    result = runner.invoke(app, ["ask", "--question", "What is this?"])
    assert result.exit_code == 1
    assert "No usable corpus" in result.stdout


def test_ask_prints_answer(data_dir, monkeypatch):
    FileCorpusStore(data_dir / "siteData.txt").write(_CORPUS)
    reply = MagicMock()
    reply.content = "Yeah, webinars run every week."
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=reply)
    monkeypatch.setattr("sitechat.rag.answer._get_llm", lambda settings: llm)

    result = runner.invoke(app, ["ask", "--question", "Any webinars?"])
    assert result.exit_code == 0
    assert "Yeah, webinars run every week." in result.stdout


def test_ask_reports_chat_errors(data_dir, monkeypatch):
    import openai

    FileCorpusStore(data_dir / "siteData.txt").write(_CORPUS)
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    llm = MagicMock()
    llm.ainvoke = AsyncMock(
        side_effect=openai.RateLimitError(
            "Rate limit", response=httpx.Response(429, request=request), body=None
        )
    )
    monkeypatch.setattr("sitechat.rag.answer._get_llm", lambda settings: llm)

    result = runner.invoke(app, ["ask", "--question", "Any webinars?"])
    assert result.exit_code == 1
    assert "Too many requests" in result.stdout
