"""Centralised settings for the SiteChat backend.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)

_DEFAULT_SITE_URLS = (
    "https://www.yapcapitalist.com/,"
    "https://www.yapcapitalist.com/apply,"
    "https://www.yapcapitalist.com/webinar,"
    "https://www.yapcapitalist.com/application-form"
)

_DEFAULT_ALLOWED_ORIGINS = (
    "http://localhost:5173,"
    "https://www.yapcapitalist.com,"
    "https://chatbot-box.onrender.com,"
    "https://chatbot-box-production.up.railway.app"
)


def _split_csv(value: str) -> list[str]:
    """Split a comma-separated env value, dropping blanks."""
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Corpus storage
    # ------------------------------------------------------------------
    data_dir: Path = field(
        default_factory=lambda: Path(os.environ.get("SITECHAT_DATA_DIR", "data"))
    )
    data_file_name: str = field(
        default_factory=lambda: os.environ.get("SITECHAT_DATA_FILE", "siteData.txt")
    )

    @property
    def data_file(self) -> Path:
        """Path of the plain-text corpus cache."""
        return self.data_dir / self.data_file_name

    min_corpus_chars: int = field(
        default_factory=lambda: int(os.environ.get("MIN_CORPUS_CHARS", "100"))
    )
    min_page_chars: int = field(
        default_factory=lambda: int(os.environ.get("MIN_PAGE_CHARS", "50"))
    )

    # ------------------------------------------------------------------
    # Target site
    # ------------------------------------------------------------------
    site_name: str = field(
        default_factory=lambda: os.environ.get("SITE_NAME", "Yap Capitalist")
    )
    site_urls: list[str] = field(
        default_factory=lambda: _split_csv(os.environ.get("SITE_URLS", _DEFAULT_SITE_URLS))
    )

    # ------------------------------------------------------------------
    # Scraper
    # ------------------------------------------------------------------
    rate_limit_delay: float = field(
        default_factory=lambda: float(os.environ.get("RATE_LIMIT_DELAY", "1.0"))
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "15.0"))
    )

    # ------------------------------------------------------------------
    # Chat model
    # ------------------------------------------------------------------
    openai_api_key: str | None = field(
        default_factory=lambda: os.environ.get("OPENAI_API_KEY") or None
    )
    openai_chat_model: str = field(
        default_factory=lambda: os.environ.get("OPENAI_CHAT_MODEL", "gpt-4o-mini")
    )
    chat_temperature: float = field(
        default_factory=lambda: float(os.environ.get("CHAT_TEMPERATURE", "0.3"))
    )
    chat_max_tokens: int = field(
        default_factory=lambda: int(os.environ.get("CHAT_MAX_TOKENS", "80"))
    )

    # ------------------------------------------------------------------
    # HTTP server
    # ------------------------------------------------------------------
    host: str = field(default_factory=lambda: os.environ.get("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.environ.get("PORT", "3000")))
    allowed_origins: list[str] = field(
        default_factory=lambda: _split_csv(
            os.environ.get("ALLOWED_ORIGINS", _DEFAULT_ALLOWED_ORIGINS)
        )
    )

    @property
    def openai_configured(self) -> bool:
        return bool(self.openai_api_key)

    def require_openai_key(self) -> str:
        """Return the completion-service credential or fail fast.

        Raises:
            RuntimeError: If ``OPENAI_API_KEY`` is not set.
        """
        if not self.openai_api_key:
            raise RuntimeError(
                "OPENAI_API_KEY environment variable is not set. "
                "Set OPENAI_API_KEY to a valid API key."
            )
        return self.openai_api_key


# Module-level singleton — import this everywhere:
#   from sitechat.config import settings
settings = Settings()
