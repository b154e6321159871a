"""Sliding-window rate limiter for report submissions.

Each client key maps to the timestamps of its accepted submissions inside the
trailing window. Storage sits behind ``RateLimitStore`` so a shared cache can
replace the in-process map when several instances serve the API.
"""

import asyncio
import logging
import time
from collections import OrderedDict
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from typing import Protocol

from wormwatch.config import get_settings

logger = logging.getLogger(__name__)


class RateLimitStore(Protocol):
    """Storage for per-key submission timestamps."""

    async def get(self, key: str) -> list[float]: ...

    async def put(self, key: str, timestamps: list[float]) -> None: ...


class InMemoryRateLimitStore:
    """Process-local store, bounded by least-recently-used eviction."""

    def __init__(self, max_keys: int = 10000):
        self._max_keys = max_keys
        self._entries: OrderedDict[str, list[float]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    async def get(self, key: str) -> list[float]:
        timestamps = self._entries.get(key)
        if timestamps is None:
            return []
        self._entries.move_to_end(key)
        return list(timestamps)

    async def put(self, key: str, timestamps: list[float]) -> None:
        self._entries[key] = list(timestamps)
        self._entries.move_to_end(key)
        while len(self._entries) > self._max_keys:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug(f"Evicted rate-limit window for {evicted}")

    def sweep(self, cutoff: float) -> int:
        """Drop keys whose newest submission is at or before cutoff.

        Returns the number of keys removed.
        """
        stale = [key for key, ts in self._entries.items() if not ts or ts[-1] <= cutoff]
        for key in stale:
            del self._entries[key]
        return len(stale)


class RateLimiter:
    """Allow at most ``limit`` accepted submissions per key per window.

    Read-modify-write on a key's timestamps is serialized per key, so a slow
    store call for one client never holds up another.
    """

    def __init__(
        self,
        store: RateLimitStore | None = None,
        limit: int = 5,
        window_seconds: float = 3600,
        clock: Callable[[], float] = time.time,
        sweep_every: int = 1000,
    ):
        self.store = store if store is not None else InMemoryRateLimitStore()
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._sweep_every = sweep_every
        self._checks = 0
        # key -> [lock, number of holders and waiters]
        self._locks: dict[str, list] = {}

    @asynccontextmanager
    async def _key_lock(self, key: str) -> AsyncIterator[None]:
        """Hold the lock for key; the lock is dropped once nobody needs it."""
        entry = self._locks.get(key)
        if entry is None:
            entry = self._locks[key] = [asyncio.Lock(), 0]
        entry[1] += 1
        try:
            async with entry[0]:
                yield
        finally:
            entry[1] -= 1
            if entry[1] == 0:
                del self._locks[key]

    async def check_and_record(self, key: str) -> bool:
        """Record a submission for key if it is within quota.

        Rejected attempts are not recorded.
        """
        self._checks += 1
        if self._checks % self._sweep_every == 0:
            self._sweep(self._clock() - self.window_seconds)

        async with self._key_lock(key):
            now = self._clock()
            cutoff = now - self.window_seconds
            timestamps = [t for t in await self.store.get(key) if t > cutoff]

            if len(timestamps) >= self.limit:
                await self.store.put(key, timestamps)
                return False

            timestamps.append(now)
            await self.store.put(key, timestamps)
            return True

    async def release(self, key: str) -> None:
        """Give back the most recently recorded submission for key.

        Used when an accepted submission could not be stored.
        """
        async with self._key_lock(key):
            timestamps = await self.store.get(key)
            if timestamps:
                timestamps.pop()
                await self.store.put(key, timestamps)

    def _sweep(self, cutoff: float) -> None:
        sweep = getattr(self.store, "sweep", None)
        if sweep is None:
            return
        removed = sweep(cutoff)
        if removed:
            logger.debug(f"Swept {removed} idle rate-limit windows")

    async def remaining(self, key: str) -> int:
        """Number of submissions key may still make in the current window."""
        cutoff = self._clock() - self.window_seconds
        timestamps = [t for t in await self.store.get(key) if t > cutoff]
        return max(self.limit - len(timestamps), 0)


def build_rate_limiter() -> RateLimiter:
    """Create a limiter from application settings."""
    settings = get_settings()
    return RateLimiter(
        store=InMemoryRateLimitStore(max_keys=settings.rate_limit_max_clients),
        limit=settings.rate_limit_max_reports,
        window_seconds=settings.rate_limit_window_seconds,
    )


# Global rate limiter instance
rate_limiter = build_rate_limiter()


def get_rate_limiter() -> RateLimiter:
    """Dependency that provides the process-wide rate limiter."""
    return rate_limiter
