"""Grounded question answering over the whole site corpus.

There is no retrieval step: the entire corpus is embedded in one prompt
together with the persona framing, a style directive and the user's question,
and the configured chat model produces a short conversational answer.
"""

from __future__ import annotations

from typing import Any

import openai

from sitechat.config import Settings
from sitechat.errors import (
    ChatError,
    CompletionConfigError,
    CompletionUnavailableError,
    RateLimitedError,
)

NO_ANSWER = "I couldn't generate a response."

_STYLE_DIRECTIVE = """\
TALK NATURALLY:
- Be conversational but not overly enthusiastic
- Use normal words people actually say
- Don't be too short or too long
- If something's unclear, ask naturally like "what do you mean by that?"
- Share info like you're explaining to a friend
- Use "yeah", "so", "basically" when it fits naturally
- Don't sound like customer service or a salesperson"""


# ---------------------------------------------------------------------------
# LLM helper
# ---------------------------------------------------------------------------

def _get_llm(settings: Settings) -> Any:
    """Return a LangChain OpenAI chat model configured from ``settings``.

    Raises:
        RuntimeError: If no OpenAI API key is configured.
    """
    api_key = settings.require_openai_key()

    from langchain_openai import ChatOpenAI

    return ChatOpenAI(
        model=settings.openai_chat_model,
        temperature=settings.chat_temperature,
        max_tokens=settings.chat_max_tokens,
        api_key=api_key,
    )


# ---------------------------------------------------------------------------
# Prompt & error mapping
# ---------------------------------------------------------------------------

def build_prompt(corpus: str, question: str, site_name: str) -> str:
    """Return the single user prompt sent to the completion service."""
    return (
        f"You are a knowledgeable assistant for {site_name}. Use the website "
        "content below to answer questions accurately and specifically.\n\n"
        f"WEBSITE CONTENT:\n{corpus}\n\n"
        f"{_STYLE_DIRECTIVE}\n\n"
        f"USER QUESTION: {question}\n\n"
        "Answer in 1–3 sentences. Make it complete and clear. "
        "Do not cut off mid-sentence."
    )


def classify_error(exc: Exception) -> ChatError:
    """Map a completion-service failure onto the client-visible taxonomy."""
    if isinstance(exc, openai.RateLimitError) or getattr(exc, "status_code", None) == 429:
        return RateLimitedError()
    if isinstance(exc, openai.AuthenticationError) or "API key" in str(exc):
        return CompletionConfigError()
    return CompletionUnavailableError()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class AnswerGenerator:
    """Answers questions about one site from its cached corpus."""

    def __init__(self, llm: Any, site_name: str) -> None:
        self.llm = llm
        self.site_name = site_name

    @classmethod
    def from_settings(cls, settings: Settings) -> "AnswerGenerator":
        return cls(_get_llm(settings), settings.site_name)

    async def answer(self, question: str, corpus: str) -> str:
        """Answer *question* using *corpus* as the only grounding text.

        Returns:
            The model's answer, or :data:`NO_ANSWER` if it returned no text.

        Raises:
            ChatError: A :class:`RateLimitedError`, :class:`CompletionConfigError`
                or :class:`CompletionUnavailableError` describing the failure.
        """
        prompt = build_prompt(corpus, question, self.site_name)
        try:
            response = await self.llm.ainvoke(prompt)
        except Exception as exc:
            print(f"[CHAT] ✗ Completion failed: {exc!r}")
            raise classify_error(exc) from exc

        text = response.content if hasattr(response, "content") else response
        if not isinstance(text, str) or not text.strip():
            return NO_ANSWER
        return text.strip()
