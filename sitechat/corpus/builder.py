"""Site corpus builder.

``CorpusBuilder.build`` orchestrates the full pipeline from the configured
URL list to a persisted corpus:

    paced fetch → extract → page records → assemble (with fallback) → store

Per-page failures are absorbed and contribute nothing; a failing store write
propagates to the caller.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, List, Sequence

import httpx

from sitechat.config import Settings
from sitechat.corpus.fallback import FALLBACK_TEXT
from sitechat.corpus.models import Corpus, render_pages
from sitechat.corpus.store import CorpusStore, FileCorpusStore, read_usable
from sitechat.scraper.extractor import extract_text
from sitechat.scraper.fetcher import fetch_url, make_client
from sitechat.scraper.models import MIN_PAGE_CHARS, PageRecord
from sitechat.scraper.pacing import Sleep, paced

Fetch = Callable[[httpx.AsyncClient, str, float], Awaitable[str]]
Extract = Callable[[str], str]
ClientFactory = Callable[[float], httpx.AsyncClient]


class CorpusBuilder:
    """Scrapes the configured pages into a :class:`CorpusStore`.

    Builds are serialised: a second ``build`` awaits the first one's lock, so
    two rebuilds never interleave their writes.
    """

    def __init__(
        self,
        store: CorpusStore,
        urls: Sequence[str],
        *,
        fallback_text: str = FALLBACK_TEXT,
        delay: float = 1.0,
        timeout: float = 15.0,
        min_corpus_chars: int = 100,
        min_page_chars: int = MIN_PAGE_CHARS,
        fetch: Fetch = fetch_url,
        extract: Extract = extract_text,
        sleep: Sleep = asyncio.sleep,
        client_factory: ClientFactory = make_client,
    ) -> None:
        self.store = store
        self.urls = list(urls)
        self.fallback_text = fallback_text
        self.delay = delay
        self.timeout = timeout
        self.min_corpus_chars = min_corpus_chars
        self.min_page_chars = min_page_chars
        self._fetch = fetch
        self._extract = extract
        self._sleep = sleep
        self._client_factory = client_factory
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(
        cls, settings: Settings, store: CorpusStore | None = None
    ) -> "CorpusBuilder":
        return cls(
            store if store is not None else FileCorpusStore(settings.data_file),
            settings.site_urls,
            delay=settings.rate_limit_delay,
            timeout=settings.request_timeout,
            min_corpus_chars=settings.min_corpus_chars,
            min_page_chars=settings.min_page_chars,
        )

    @property
    def building(self) -> bool:
        return self._lock.locked()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def build(self, discard_existing: bool = False) -> Corpus:
        """Scrape every configured URL and persist the assembled corpus.

        Args:
            discard_existing: Delete the stored corpus before scraping, so
                readers see "not ready" rather than stale text meanwhile.

        Returns:
            The corpus that was written.

        Raises:
            OSError: If the store cannot be written.
        """
        async with self._lock:
            if discard_existing and await asyncio.to_thread(self.store.delete):
                print(f"[CORPUS] Deleted existing corpus at {self.store.location}")

            print(f"[CORPUS] Starting scrape of {len(self.urls)} page(s) …")
            pages = await self._scrape_all()
            corpus = self.assemble(pages)
            await asyncio.to_thread(self.store.write, corpus.text)

            scraped = sum(1 for page in pages if page.ok)
            print(
                f"[CORPUS] ✓ {scraped}/{len(self.urls)} page(s) scraped, "
                f"source={corpus.source}, {corpus.length} chars saved to "
                f"{self.store.location}"
            )
            return corpus

    async def ensure(self) -> Corpus | None:
        """Build only when the store lacks a usable corpus.

        An existing usable corpus is always trusted; use
        ``build(discard_existing=True)`` to replace it.

        Returns:
            The new corpus, or ``None`` when the stored one was kept.
        """
        existing = await asyncio.to_thread(
            read_usable, self.store, self.min_corpus_chars
        )
        if existing is not None:
            print(
                f"[CORPUS] Using existing corpus at {self.store.location} "
                f"({len(existing)} chars)"
            )
            return None
        print(f"[CORPUS] No usable corpus at {self.store.location}, will scrape …")
        return await self.build()

    def assemble(self, pages: List[PageRecord]) -> Corpus:
        """Reduce *pages* to corpus text, topping up with the fallback text.

        The result is never shorter than the fallback description:

        - scraped text below ``min_corpus_chars``: fallback only;
        - scraped text shorter than the fallback: fallback, then the pages;
        - otherwise: the scraped pages only.
        """
        scraped = render_pages(pages)
        if len(scraped) < self.min_corpus_chars:
            return Corpus(self.fallback_text, "fallback", pages)
        if len(scraped) < len(self.fallback_text):
            return Corpus(self.fallback_text + scraped, "mixed", pages)
        return Corpus(scraped, "scraped", pages)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _scrape_all(self) -> List[PageRecord]:
        pages: List[PageRecord] = []
        async with self._client_factory(self.timeout) as client:
            async for url in paced(self.urls, self.delay, self._sleep):
                text = await self._scrape_page(client, url)
                pages.append(PageRecord(url=url, text=text, min_chars=self.min_page_chars))
        return pages

    async def _scrape_page(self, client: httpx.AsyncClient, url: str) -> str:
        html = await self._fetch(client, url, self.timeout)
        if not html:
            return ""
        try:
            text = self._extract(html)
        except Exception as exc:  # noqa: BLE001
            print(f"[SCRAPING] ✗ Extraction failed for {url!r}: {exc}")
            return ""
        print(f"[SCRAPING] ✓ {url}: {len(text)} chars")
        print(f"[SCRAPING] Preview: {text[:200]}...")
        return text
