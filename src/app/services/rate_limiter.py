from abc import ABC, abstractmethod


class IRateLimiter(ABC):
    """Sliding-window attempt counter keyed by client identity"""

    @abstractmethod
    def is_limited(self, key: str, max_attempts: int = 5, window_ms: int = 10_000) -> bool:
        """Record an attempt for key and report whether it exceeds max_attempts"""
        pass

    @abstractmethod
    def clear_all(self) -> None:
        pass

    @abstractmethod
    def clear_key(self, key: str) -> None:
        pass
