import logging
import time
from typing import Callable, Dict, List

from src.app.services.rate_limiter import IRateLimiter

logger = logging.getLogger(__name__)


class InMemoryRateLimiter(IRateLimiter):
    """
    Sliding-window rate limiter kept in process memory.

    One instance per application; state lives exactly as long as the instance.
    Keys whose attempts have all left their window are dropped on the next sweep.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._store: Dict[str, List[float]] = {}
        self._windows: Dict[str, int] = {}
        self._last_sweep = clock() * 1000

    def __len__(self) -> int:
        return len(self._store)

    def is_limited(self, key: str, max_attempts: int = 5, window_ms: int = 10_000) -> bool:
        now = self._clock() * 1000
        window_start = now - window_ms

        timestamps = self._store.get(key, [])
        timestamps.append(now)
        recent = [ts for ts in timestamps if ts >= window_start]
        self._store[key] = recent
        self._windows[key] = window_ms

        if now - self._last_sweep >= window_ms:
            self._sweep(now)

        # max_attempts are allowed, the next one within the window is blocked
        limited = len(recent) > max_attempts
        if limited:
            logger.warning(f"Rate limit exceeded for {key}")
        return limited

    def _sweep(self, now: float) -> None:
        expired = [
            key
            for key, timestamps in self._store.items()
            if not timestamps or timestamps[-1] < now - self._windows.get(key, 0)
        ]
        for key in expired:
            self.clear_key(key)
        self._last_sweep = now
        if expired:
            logger.debug(f"Rate limiter dropped {len(expired)} idle key(s)")

    def clear_all(self) -> None:
        self._store.clear()
        self._windows.clear()
        logger.info("Rate limiter cleared")

    def clear_key(self, key: str) -> None:
        self._store.pop(key, None)
        self._windows.pop(key, None)
