"""Data models for the scraper pipeline."""

from __future__ import annotations

from dataclasses import dataclass

# A page must yield more than this many characters to count as scraped.
MIN_PAGE_CHARS = 50


@dataclass
class PageRecord:
    """Text extracted from one target URL during a single build."""

    url: str
    text: str
    min_chars: int = MIN_PAGE_CHARS

    @property
    def ok(self) -> bool:
        return len(self.text) > self.min_chars

    def render(self) -> str:
        """Return the page block as it appears in the corpus, marker included."""
        return f"\n\n=== PAGE: {self.url} ===\n{self.text}"
