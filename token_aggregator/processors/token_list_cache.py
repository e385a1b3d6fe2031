import logging
import threading
import time
from typing import Callable, Iterable, Optional

from ..clients import TokenListFetchError, UpstreamError
from ..config import Config
from ..models import CachedDirectory, TokenListEntry

logger = logging.getLogger(__name__)


def now_ms() -> int:
    return int(time.time() * 1000)


def is_fresh(snapshot: Optional[CachedDirectory], now: int, ttl_ms: int) -> bool:
    return snapshot is not None and (now - snapshot.fetched_at) < ttl_ms


class TokenListCache:
    """
    Time-bounded in-memory snapshot of the Jupiter token directory.
    The snapshot is swapped wholesale on refresh and served stale when a refresh fails.
    """

    def __init__(self, fetch_tokens: Callable[[], Iterable[TokenListEntry]],
                 ttl_ms: Optional[int] = None, clock: Callable[[], int] = now_ms):
        self.fetch_tokens = fetch_tokens
        self.ttl_ms = Config.TOKEN_LIST_CACHE_TTL_MS if ttl_ms is None else ttl_ms
        self.clock = clock
        self._snapshot: Optional[CachedDirectory] = None
        self._refresh_lock = threading.Lock()

    @property
    def snapshot(self) -> Optional[CachedDirectory]:
        return self._snapshot

    def get_directory(self) -> CachedDirectory:
        """
        Return the current directory snapshot, refreshing it when expired.

        Raises:
            TokenListFetchError: refresh failed and nothing was cached before
        """
        snapshot = self._snapshot
        if is_fresh(snapshot, self.clock(), self.ttl_ms):
            logger.debug('Using cached Jupiter token list')
            return snapshot

        with self._refresh_lock:
            # Another request may have refreshed while we waited
            snapshot = self._snapshot
            now = self.clock()
            if is_fresh(snapshot, now, self.ttl_ms):
                return snapshot

            try:
                entries = tuple(self.fetch_tokens())
            except UpstreamError as e:
                logger.error(f'Error fetching Jupiter token list: {e}')
                if snapshot is not None:
                    logger.warning(f'Using expired cached token list due to fetch error ({len(snapshot.entries)} tokens, stale-serve)')
                    return snapshot
                raise TokenListFetchError(f'Token list unavailable: {e}') from e

            fresh = CachedDirectory(entries=entries, fetched_at=now)
            self._snapshot = fresh
            return fresh

    def find(self, symbol: str) -> Optional[TokenListEntry]:
        """Case-insensitive exact symbol match, first entry wins."""
        upper_symbol = symbol.upper()
        for entry in self.get_directory().entries:
            if entry.symbol.upper() == upper_symbol:
                return entry
        return None

    def invalidate(self):
        self._snapshot = None
