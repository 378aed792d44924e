"""Corpus package — storage and building of the cached site text."""

from sitechat.corpus.builder import CorpusBuilder
from sitechat.corpus.models import Corpus
from sitechat.corpus.store import (
    CorpusStore,
    FileCorpusStore,
    MemoryCorpusStore,
    read_usable,
)

__all__ = [
    "Corpus",
    "CorpusBuilder",
    "CorpusStore",
    "FileCorpusStore",
    "MemoryCorpusStore",
    "read_usable",
]
