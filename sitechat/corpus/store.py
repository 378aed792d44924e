"""Corpus storage backends.

The corpus is one flat text blob.  Writers replace it wholesale; readers must
only ever observe a complete old or complete new corpus.

``FileCorpusStore`` is the production backend (one UTF-8 file, atomic
replace).  ``MemoryCorpusStore`` keeps the text in process and is used by the
test-suite in place of the filesystem.
"""

from __future__ import annotations

import os
import tempfile
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path


# ---------------------------------------------------------------------------
# Abstract base
# ---------------------------------------------------------------------------

class CorpusStore(ABC):
    """Abstract base class for a corpus cache."""

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable description of where the corpus lives."""

    @abstractmethod
    def exists(self) -> bool:
        """Return ``True`` if a corpus has been written."""

    @abstractmethod
    def read(self) -> str:
        """Return the stored corpus.

        Raises:
            FileNotFoundError: If no corpus has been written.
        """

    @abstractmethod
    def write(self, text: str) -> None:
        """Replace the stored corpus with *text*."""

    @abstractmethod
    def delete(self) -> bool:
        """Remove the stored corpus; return ``True`` if one existed."""

    @abstractmethod
    def modified_at(self) -> datetime | None:
        """Return the time of the last write, or ``None`` if nothing is stored."""


def read_usable(store: CorpusStore, min_chars: int) -> str | None:
    """Return the stored corpus if it is longer than *min_chars*, else ``None``.

    A missing corpus and a too-short corpus are both reported as ``None``.
    """
    try:
        text = store.read()
    except FileNotFoundError:
        return None
    return text if len(text) > min_chars else None


# ---------------------------------------------------------------------------
# Filesystem backend
# ---------------------------------------------------------------------------

class FileCorpusStore(CorpusStore):
    """Corpus kept in a single UTF-8 text file."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    @property
    def location(self) -> str:
        return str(self.path)

    def exists(self) -> bool:
        return self.path.is_file()

    def read(self) -> str:
        return self.path.read_text(encoding="utf-8")

    def write(self, text: str) -> None:
        """Write *text* to a sibling temp file, then rename it over the target.

        ``os.replace`` is atomic on POSIX and Windows when source and target
        share a filesystem, which the sibling temp file guarantees.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        tmp_path = Path(tmp_name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(text)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_path, self.path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise

    def delete(self) -> bool:
        try:
            self.path.unlink()
        except FileNotFoundError:
            return False
        return True

    def modified_at(self) -> datetime | None:
        try:
            mtime = self.path.stat().st_mtime
        except FileNotFoundError:
            return None
        return datetime.fromtimestamp(mtime, tz=timezone.utc)


# ---------------------------------------------------------------------------
# In-memory backend
# ---------------------------------------------------------------------------

class MemoryCorpusStore(CorpusStore):
    """Corpus held in process memory."""

    def __init__(self, text: str | None = None) -> None:
        self._text = text
        self._modified: datetime | None = (
            datetime.now(timezone.utc) if text is not None else None
        )
        self.writes = 0

    @property
    def location(self) -> str:
        return "memory"

    def exists(self) -> bool:
        return self._text is not None

    def read(self) -> str:
        if self._text is None:
            raise FileNotFoundError("no corpus in memory store")
        return self._text

    def write(self, text: str) -> None:
        self._text = text
        self._modified = datetime.now(timezone.utc)
        self.writes += 1

    def delete(self) -> bool:
        existed = self._text is not None
        self._text = None
        self._modified = None
        return existed

    def modified_at(self) -> datetime | None:
        return self._modified
