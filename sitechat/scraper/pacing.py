"""Request pacing for sequential scraping.

Pages of the target site are fetched one after another with a fixed pause
between requests.  The pause is injected so tests can run against a fake
clock instead of waiting.
"""

from __future__ import annotations

import asyncio
from typing import AsyncIterator, Awaitable, Callable, Iterable, TypeVar

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


async def paced(
    items: Iterable[T],
    delay: float,
    sleep: Sleep = asyncio.sleep,
) -> AsyncIterator[T]:
    """Yield *items* in order, awaiting ``sleep(delay)`` between consecutive ones.

    No pause precedes the first item or follows the last.  A non-positive
    *delay* disables pacing.
    """
    first = True
    for item in items:
        if not first and delay > 0:
            await sleep(delay)
        first = False
        yield item
