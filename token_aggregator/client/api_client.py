import logging
import threading
import time
from typing import Any, Callable, Dict, Hashable, Optional, Tuple

import requests

logger = logging.getLogger(__name__)

DEFAULT_STALE_TIME = 60.0
DEFAULT_RETRY = 2


class ApiClientError(Exception):
    """Raised when the token API answers with an error after all retries."""
    pass


def exponential_delay(attempt: int) -> float:
    return min(1.0 * (2 ** attempt), 30.0)


def token_key(symbol: str) -> Tuple[str, str]:
    return ('token-data', symbol.lower())


TRENDING_KEY = ('trending-tokens',)


class QueryCache:
    """Results keyed by query key, each stamped with the time it was stored."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._entries: Dict[Hashable, Tuple[Any, float]] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
        return entry[0] if entry else None

    def set(self, key: Hashable, data: Any):
        with self._lock:
            self._entries[key] = (data, self.clock())

    def is_fresh(self, key: Hashable, stale_time: float) -> bool:
        with self._lock:
            entry = self._entries.get(key)
        return entry is not None and (self.clock() - entry[1]) < stale_time

    def clear(self):
        with self._lock:
            self._entries.clear()


class TokenApiClient:
    """Client for /api/token and /api/trending with a local result cache and retries."""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None,
                 stale_time: float = DEFAULT_STALE_TIME, retry: int = DEFAULT_RETRY,
                 retry_delay: Callable[[int], float] = exponential_delay,
                 sleep: Callable[[float], None] = time.sleep, timeout: float = 30.0,
                 cache: Optional[QueryCache] = None):
        self.base_url = base_url.rstrip('/')
        self._session = session or requests.Session()
        self.stale_time = stale_time
        self.retry = retry
        self.retry_delay = retry_delay
        self.sleep = sleep
        self.timeout = timeout
        self.cache = cache or QueryCache()

    def _request(self, path: str) -> Any:
        url = f'{self.base_url}{path}'
        try:
            resp = self._session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise ApiClientError(f'Request to {url} failed: {e}') from e
        try:
            body = resp.json()
        except ValueError:
            body = None
        if not resp.ok:
            message = body.get('error') if isinstance(body, dict) else None
            raise ApiClientError(message or f'Request to {url} failed with status {resp.status_code}')
        if body is None:
            raise ApiClientError(f'Invalid JSON from {url}')
        return body

    def _with_retry(self, fn: Callable[[], Any]) -> Any:
        attempts = self.retry + 1
        for attempt in range(attempts):
            try:
                return fn()
            except ApiClientError as e:
                if attempt < attempts - 1:
                    delay = self.retry_delay(attempt)
                    logger.warning(f'{e}, retrying in {delay:.1f}s ({attempt + 1}/{self.retry})')
                    self.sleep(delay)
                    continue
                raise

    def _fetch_token_once(self, symbol: str) -> Dict[str, Any]:
        data = self._request(f"/api/token/{requests.utils.quote(symbol, safe='')}")
        if isinstance(data, dict) and data.get('error'):
            raise ApiClientError(data['error'])
        return data

    def _fetch_trending_once(self) -> list:
        data = self._request('/api/trending')
        if not isinstance(data, dict) or not data.get('success'):
            message = data.get('error') if isinstance(data, dict) else None
            raise ApiClientError(message or 'Failed to fetch trending tokens')
        return data.get('data') or []

    def fetch_token(self, symbol: str) -> Dict[str, Any]:
        """Fetch one token bypassing the cache, then store the result."""
        data = self._with_retry(lambda: self._fetch_token_once(symbol))
        self.cache.set(token_key(symbol), data)
        return data

    def fetch_trending(self) -> list:
        data = self._with_retry(self._fetch_trending_once)
        self.cache.set(TRENDING_KEY, data)
        return data

    def get_token(self, symbol: str) -> Dict[str, Any]:
        key = token_key(symbol)
        if self.cache.is_fresh(key, self.stale_time):
            return self.cache.get(key)
        return self.fetch_token(symbol)

    def get_trending(self) -> list:
        if self.cache.is_fresh(TRENDING_KEY, self.stale_time):
            return self.cache.get(TRENDING_KEY)
        return self.fetch_trending()

    def has_fresh_token(self, symbol: str) -> bool:
        return self.cache.is_fresh(token_key(symbol), self.stale_time)
