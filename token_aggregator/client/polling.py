import logging
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class Poller:
    """Re-run fn every `interval` seconds on a daemon thread until stopped."""

    def __init__(self, fn: Callable[[], Any], interval: float = 60.0, name: str = 'poller'):
        self.fn = fn
        self.interval = interval
        self.name = name
        self.last_result: Any = None
        self.last_error: Optional[Exception] = None
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def _tick(self):
        try:
            self.last_result = self.fn()
            self.last_error = None
        except Exception as e:
            self.last_error = e
            logger.error(f'[{self.name}] refetch failed: {e}')

    def _loop(self, run_immediately: bool):
        if run_immediately:
            self._tick()
        while not self._stop.wait(self.interval):
            self._tick()

    def start(self, run_immediately: bool = True):
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, args=(run_immediately,), name=self.name, daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
