# ABOUTME: Keyed TTL cache that coalesces concurrent provider fetches.
# ABOUTME: One in-flight fetch per key; failures are evicted rather than cached.

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from artref.artworks.types import ArtworkRecord

logger = logging.getLogger(__name__)

DEFAULT_TTL = 5 * 60.0

Fetcher = Callable[[], Awaitable[list[ArtworkRecord]]]


@dataclass
class CacheEntry:
    """Cached provider result or the handle of the fetch producing it.

    At most one of `data` and `in_flight` is meaningful at a time.
    """

    key: str
    timestamp: float | None = None
    data: list[ArtworkRecord] | None = None
    in_flight: "asyncio.Future[list[ArtworkRecord]] | None" = None

    def is_fresh(self, now: float, ttl: float) -> bool:
        return self.data is not None and self.timestamp is not None and self.timestamp + ttl > now


class ProviderCache:
    """Request-deduplication cache shared by all providers of one scan session.

    Guarantees:
    - At most one in-flight fetch per key; concurrent callers share its result.
    - Completed results are served for `ttl` seconds, then refetched.
    - A failed fetch removes the entry so the next request retries.

    The pending entry is installed before the fetch first suspends, so a
    second caller arriving before completion always sees it.
    """

    def __init__(
        self, ttl: float = DEFAULT_TTL, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self.hits = 0
        self.misses = 0
        self.coalesced = 0

    @property
    def ttl(self) -> float:
        return self._ttl

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def peek(self, key: str) -> CacheEntry | None:
        return self._entries.get(key)

    def clear(self) -> None:
        """Drop every entry. In-flight fetches finish but are not stored."""
        self._entries.clear()

    async def get_or_fetch(self, key: str, fetcher: Fetcher) -> list[ArtworkRecord]:
        """Return cached records for `key`, joining or starting a fetch as needed."""
        entry = self._entries.get(key)
        if entry is not None:
            if entry.in_flight is not None:
                self.coalesced += 1
                logger.debug("cache: joining in-flight fetch for %s", key)
                return list(await asyncio.shield(entry.in_flight))
            if entry.is_fresh(self._clock(), self._ttl):
                self.hits += 1
                logger.debug("cache: hit for %s", key)
                return list(entry.data or [])

        self.misses += 1
        pending = CacheEntry(key=key)
        # No await between here and the install below.
        pending.in_flight = asyncio.ensure_future(self._fill(pending, fetcher))
        self._entries[key] = pending
        return list(await asyncio.shield(pending.in_flight))

    async def _fill(self, entry: CacheEntry, fetcher: Fetcher) -> list[ArtworkRecord]:
        try:
            data = list(await fetcher())
        except BaseException:
            if self._entries.get(entry.key) is entry:
                del self._entries[entry.key]
            logger.debug("cache: evicted %s after failed fetch", entry.key)
            raise

        if self._entries.get(entry.key) is entry:
            self._entries[entry.key] = CacheEntry(
                key=entry.key, timestamp=self._clock(), data=data
            )
        return data
