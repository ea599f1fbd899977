"""
Request throttling

Keeps a minimum interval between requests to a shared remote endpoint. The
first request runs immediately and starts a ticker thread; requests that
arrive while the ticker is alive wait in a bounded queue and are released one
per tick. The ticker stops itself when it finds the queue empty, so idle
periods cost nothing.
"""

import threading
import time
from collections import deque
from concurrent.futures import Future
from typing import Any, Callable, Deque, Optional, Tuple

from loguru import logger

from ..errors import ThrottleQueueFullError


class RequestThrottle:
    """Runs callables no closer together than `min_interval` seconds"""

    def __init__(self, min_interval: float, max_queue: int = 32):
        self.min_interval = min_interval
        self.max_queue = max_queue
        self._queue: Deque[Tuple[Future, Callable, tuple, dict]] = deque()
        self._lock = threading.Lock()
        self._ticker: Optional[threading.Thread] = None

    @property
    def pending(self) -> int:
        with self._lock:
            return len(self._queue)

    @property
    def ticking(self) -> bool:
        with self._lock:
            return self._ticker is not None

    def submit(self, fn: Callable[..., Any], *args, **kwargs) -> Any:
        """Run `fn(*args, **kwargs)` when the throttle allows it and return its result"""
        with self._lock:
            if self._ticker is None:
                logger.debug("Throttle: creating ticker")
                self._ticker = threading.Thread(target=self._tick, name="request-throttle", daemon=True)
                self._ticker.start()
                future = None
            else:
                if len(self._queue) >= self.max_queue:
                    raise ThrottleQueueFullError(
                        f"{len(self._queue)} requests already waiting (max {self.max_queue})"
                    )
                future = Future()
                self._queue.append((future, fn, args, kwargs))
                logger.debug(f"Throttle: queued request ({len(self._queue)} waiting)")

        if future is None:
            return fn(*args, **kwargs)
        return future.result()

    def _tick(self) -> None:
        while True:
            time.sleep(self.min_interval)
            with self._lock:
                if not self._queue:
                    logger.debug("Throttle: destroying ticker")
                    self._ticker = None
                    return
                future, fn, args, kwargs = self._queue.popleft()

            if not future.set_running_or_notify_cancel():
                continue
            try:
                future.set_result(fn(*args, **kwargs))
            except Exception as e:
                future.set_exception(e)

    def cancel_pending(self) -> int:
        """Cancel every queued request; their callers get CancelledError"""
        with self._lock:
            cancelled = 0
            while self._queue:
                future, _, _, _ = self._queue.popleft()
                if future.cancel():
                    cancelled += 1
        if cancelled:
            logger.info(f"Throttle: cancelled {cancelled} queued requests")
        return cancelled
