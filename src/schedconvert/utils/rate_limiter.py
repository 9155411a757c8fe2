"""Thread-safe request pacing for API calls."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Callable


@dataclass
class RateLimiter:
    """
    Enforces a minimum interval between consecutive requests.

    Thread-safe; the first call never waits.
    """

    min_interval: float = 0.2
    clock: Callable[[], float] = time.monotonic
    sleep: Callable[[float], None] = time.sleep
    _last_request: float | None = field(default=None, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False)

    def acquire(self) -> float:
        """
        Block until the next request may be sent.

        Returns:
            Seconds spent waiting.
        """
        with self._lock:
            waited = 0.0
            if self._last_request is not None:
                elapsed = self.clock() - self._last_request
                waited = max(0.0, self.min_interval - elapsed)
                if waited > 0:
                    self.sleep(waited)

            self._last_request = self.clock()
            return waited

    def reset(self) -> None:
        """Forget the previous request so the next call goes straight through."""
        with self._lock:
            self._last_request = None
