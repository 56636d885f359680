"""Time-bounded cache of already verified bearer tokens."""
import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from fintrack.auth.tokens import Identity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    identity: Identity
    verified_at: float


class CredentialCache:
    """
    Map of token -> identity, valid for ``ttl`` seconds after verification.

    ``clock`` must be monotonic; it is injectable so expiry can be tested
    without sleeping.
    """

    def __init__(self, ttl: float = 300.0, clock: Callable[[], float] = time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, token: str) -> Optional[Identity]:
        """Cached identity, or None if absent or older than the TTL."""
        with self._lock:
            entry = self._entries.get(token)
        if entry is None or self._clock() - entry.verified_at >= self.ttl:
            return None
        return entry.identity

    def put(self, token: str, identity: Identity) -> None:
        with self._lock:
            self._entries[token] = CacheEntry(identity=identity, verified_at=self._clock())

    def invalidate(self, token: str) -> None:
        with self._lock:
            self._entries.pop(token, None)

    def sweep(self) -> int:
        """
        Drop every expired entry.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        with self._lock:
            expired = [
                token for token, entry in self._entries.items()
                if now - entry.verified_at >= self.ttl
            ]
            for token in expired:
                del self._entries[token]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, token: str) -> bool:
        with self._lock:
            return token in self._entries


class CacheSweeper:
    """Background task that sweeps a ``CredentialCache`` on a fixed period."""

    def __init__(self, cache: CredentialCache, interval: float = 60.0):
        self.cache = cache
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Schedule the sweep loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="credential-cache-sweeper")
        logger.info("Credential cache sweeper started", extra={"interval_seconds": self.interval})

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Credential cache sweeper stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            removed = self.cache.sweep()
            if removed:
                logger.debug("Swept expired credentials", extra={"removed": removed, "remaining": len(self.cache)})
