import logging
import threading
from typing import Dict, Iterable, Optional, Set

from .api_client import ApiClientError, TokenApiClient

logger = logging.getLogger(__name__)


class Prefetcher:
    """
    Hover-triggered token prefetch.
    Skips symbols that are cached and fresh or already in flight, and
    debounces repeated triggers per symbol.
    """

    def __init__(self, client: TokenApiClient, delay: float = 0.1):
        self.client = client
        self.delay = delay
        self._in_flight: Set[str] = set()
        self._timers: Dict[str, threading.Timer] = {}
        self._lock = threading.Lock()

    def prefetch_token(self, symbol: str) -> bool:
        """Schedule a prefetch. Returns False when it was skipped."""
        key = symbol.lower()
        if self.client.has_fresh_token(key):
            return False

        with self._lock:
            if key in self._in_flight:
                return False
            pending = self._timers.pop(key, None)
            if pending is not None:
                pending.cancel()
            timer = threading.Timer(self.delay, self._run, args=(key,))
            timer.daemon = True
            self._timers[key] = timer
        timer.start()
        return True

    def _run(self, key: str):
        with self._lock:
            if self._timers.get(key) is not threading.current_thread():
                # superseded by a later trigger for the same symbol
                return
            self._in_flight.add(key)
        try:
            self.client.fetch_token(key)
            logger.debug(f'Prefetched data for {key}')
        except ApiClientError as e:
            logger.warning(f'Prefetch failed for {key}: {e}')
        finally:
            with self._lock:
                self._in_flight.discard(key)
                del self._timers[key]

    def prefetch_multiple(self, symbols: Iterable[str]) -> int:
        return sum(1 for symbol in symbols if self.prefetch_token(symbol))

    def is_prefetching(self, symbol: str) -> bool:
        with self._lock:
            return symbol.lower() in self._in_flight

    @property
    def prefetching_count(self) -> int:
        with self._lock:
            return len(self._in_flight)

    def wait(self, timeout: Optional[float] = None):
        """Block until every scheduled prefetch has finished."""
        with self._lock:
            timers = list(self._timers.values())
        for timer in timers:
            timer.join(timeout)
