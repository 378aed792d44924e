"""Async HTTP fetcher for the configured site pages.

Fetch failures are never fatal to a corpus build: any non-success status or
transport error is printed and reported as an empty page.
"""

from __future__ import annotations

import httpx

_DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    )
}

_DEFAULT_TIMEOUT = 15.0


def make_client(timeout: float = _DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    """Return an ``AsyncClient`` with the browser-like identity header."""
    return httpx.AsyncClient(
        headers=_DEFAULT_HEADERS,
        timeout=timeout,
        follow_redirects=True,
    )


async def fetch_url(
    client: httpx.AsyncClient,
    url: str,
    timeout: float = _DEFAULT_TIMEOUT,
) -> str:
    """Fetch *url* and return its HTML, or ``""`` on any failure.

    Args:
        client: Shared client for the current build.
        url: Page to fetch.
        timeout: Seconds allowed for each phase of the request (connect,
            write, read and pool acquisition), not for the request as a whole.
    """
    print(f"[SCRAPING] Fetching {url}")
    try:
        response = await client.get(url, timeout=timeout)
    except Exception as exc:  # noqa: BLE001
        print(f"[SCRAPING] ✗ Error fetching {url!r}: {exc!r}")
        return ""

    if not response.is_success:
        print(
            f"[SCRAPING] ✗ Failed to fetch {url!r}: "
            f"{response.status_code} {response.reason_phrase}"
        )
        return ""

    return response.text
