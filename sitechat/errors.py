"""Client-visible chat failures.

Every :class:`ChatError` carries the HTTP status and the message the API
returns as ``{"error": message}``.
"""

from __future__ import annotations


class ChatError(Exception):
    """Base class for failures surfaced to ``/chat`` callers."""

    status_code: int = 500
    default_message: str = "I'm temporarily unavailable. Please try again."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidChatRequest(ChatError):
    status_code = 400
    default_message = "Valid message is required"


class RateLimitedError(ChatError):
    """The completion service asked us to slow down; callers may retry."""

    status_code = 429
    default_message = "Too many requests. Please try again in a moment."


class CompletionConfigError(ChatError):
    """The completion service rejected our credential; needs a server-side fix."""

    status_code = 500
    default_message = "API configuration error. Please contact support."


class CompletionUnavailableError(ChatError):
    status_code = 500
