"""Corpus data model."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal

from sitechat.scraper.models import PageRecord

CorpusSource = Literal["scraped", "fallback", "mixed"]


@dataclass
class Corpus:
    """The text handed to the answer generator, plus how it was assembled."""

    text: str
    source: CorpusSource
    pages: List[PageRecord] = field(default_factory=list)

    @property
    def length(self) -> int:
        return len(self.text)

    def is_usable(self, min_chars: int) -> bool:
        return self.length > min_chars


def render_pages(pages: List[PageRecord]) -> str:
    """Concatenate the marked blocks of every successful page, in order."""
    return "".join(page.render() for page in pages if page.ok)
