"""Tests for the answer generator — prompt contract and failure mapping.

The chat model is replaced by a ``MagicMock`` whose ``ainvoke`` is an
``AsyncMock``; no request ever reaches the completion service.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest

from sitechat.config import Settings
from sitechat.errors import (
    CompletionConfigError,
    CompletionUnavailableError,
    RateLimitedError,
)
from sitechat.rag.answer import NO_ANSWER, AnswerGenerator, build_prompt, classify_error


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_CORPUS = "\n\n=== PAGE: https://site.example/ ===\nWe run weekly webinars for founders."

_OPENAI_REQUEST = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def _status_error(cls: type, status: int, message: str) -> Exception:
    return cls(message, response=httpx.Response(status, request=_OPENAI_REQUEST), body=None)


def _llm_returning(content) -> MagicMock:
    reply = MagicMock()
    reply.content = content
    llm = MagicMock()
    llm.ainvoke = AsyncMock(return_value=reply)
    return llm


def _llm_raising(exc: Exception) -> MagicMock:
    llm = MagicMock()
    llm.ainvoke = AsyncMock(side_effect=exc)
    return llm


# ---------------------------------------------------------------------------
# Prompt
# ---------------------------------------------------------------------------

class TestBuildPrompt:
    def test_contains_persona_corpus_style_and_question(self) -> None:
        prompt = build_prompt(_CORPUS, "When are the webinars?", "Yap Capitalist")

        assert prompt.startswith("You are a knowledgeable assistant for Yap Capitalist.")
        assert f"WEBSITE CONTENT:\n{_CORPUS}" in prompt
        assert "TALK NATURALLY:" in prompt
        assert "USER QUESTION: When are the webinars?" in prompt
        assert "Answer in 1–3 sentences." in prompt
        assert "Do not cut off mid-sentence." in prompt

    def test_corpus_precedes_question(self) -> None:
        prompt = build_prompt(_CORPUS, "Q?", "Site")
        assert prompt.index(_CORPUS) < prompt.index("USER QUESTION: Q?")


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------

class TestAnswer:
    async def test_returns_stripped_model_text(self) -> None:
        llm = _llm_returning("  Every Thursday, basically.  \n")
        generator = AnswerGenerator(llm, "Yap Capitalist")

        answer = await generator.answer("When?", _CORPUS)

        assert answer == "Every Thursday, basically."
        prompt = llm.ainvoke.await_args.args[0]
        assert _CORPUS in prompt
        assert "USER QUESTION: When?" in prompt

    @pytest.mark.parametrize("content", ["", "   ", None, []])
    async def test_empty_reply_becomes_placeholder(self, content) -> None:
        generator = AnswerGenerator(_llm_returning(content), "Site")
        assert await generator.answer("Q?", _CORPUS) == NO_ANSWER

    async def test_rate_limit_maps_to_retryable_error(self) -> None:
        exc = _status_error(openai.RateLimitError, 429, "Rate limit reached")
        generator = AnswerGenerator(_llm_raising(exc), "Site")

        with pytest.raises(RateLimitedError) as info:
            await generator.answer("Q?", _CORPUS)

        assert info.value.status_code == 429
        assert info.value.__cause__ is exc

    async def test_authentication_maps_to_config_error(self) -> None:
        exc = _status_error(openai.AuthenticationError, 401, "Incorrect API key provided")
        generator = AnswerGenerator(_llm_raising(exc), "Site")

        with pytest.raises(CompletionConfigError) as info:
            await generator.answer("Q?", _CORPUS)

        assert info.value.status_code == 500

    async def test_other_failures_map_to_unavailable(self) -> None:
        generator = AnswerGenerator(_llm_raising(ConnectionError("reset")), "Site")

        with pytest.raises(CompletionUnavailableError) as info:
            await generator.answer("Q?", _CORPUS)

        assert info.value.message == "I'm temporarily unavailable. Please try again."


class TestClassifyError:
    def test_status_code_429_without_openai_type(self) -> None:
        exc = RuntimeError("slow down")
        exc.status_code = 429  # type: ignore[attr-defined]
        assert isinstance(classify_error(exc), RateLimitedError)

    def test_api_key_message(self) -> None:
        assert isinstance(
            classify_error(ValueError("Did not find API key")), CompletionConfigError
        )

    def test_server_error(self) -> None:
        exc = _status_error(openai.InternalServerError, 500, "boom")
        assert isinstance(classify_error(exc), CompletionUnavailableError)


# ---------------------------------------------------------------------------
# Construction from settings
# ---------------------------------------------------------------------------

class TestFromSettings:
    def test_missing_key_fails_fast(self) -> None:
        settings = Settings(openai_api_key=None)
        with pytest.raises(RuntimeError, match="OPENAI_API_KEY"):
            AnswerGenerator.from_settings(settings)

    def test_builds_chat_model_with_configured_sampling(self) -> None:
        settings = Settings(
            openai_api_key="sk-test",
            openai_chat_model="gpt-4o-mini",
            chat_temperature=0.3,
            chat_max_tokens=80,
            site_name="Yap Capitalist",
        )
        with patch("langchain_openai.ChatOpenAI") as chat_cls:
            generator = AnswerGenerator.from_settings(settings)

        chat_cls.assert_called_once_with(
            model="gpt-4o-mini",
            temperature=0.3,
            max_tokens=80,
            api_key="sk-test",
        )
        assert generator.llm is chat_cls.return_value
        assert generator.site_name == "Yap Capitalist"
