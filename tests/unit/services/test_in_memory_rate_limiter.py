"""
Unit tests for the in-memory sliding-window rate limiter
"""

from src.adapter.services.in_memory_rate_limiter import InMemoryRateLimiter


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_allows_max_attempts_then_limits():
    limiter = InMemoryRateLimiter(clock=FakeClock())

    results = [limiter.is_limited("login:1.2.3.4", 5, 10_000) for _ in range(6)]

    assert results == [False, False, False, False, False, True]


def test_attempts_outside_window_are_forgotten():
    clock = FakeClock()
    limiter = InMemoryRateLimiter(clock=clock)
    for _ in range(5):
        limiter.is_limited("login:1.2.3.4", 5, 10_000)

    clock.now += 10.001

    assert limiter.is_limited("login:1.2.3.4", 5, 10_000) is False


def test_keys_are_independent():
    limiter = InMemoryRateLimiter(clock=FakeClock())
    for _ in range(6):
        limiter.is_limited("login:1.1.1.1", 5, 10_000)

    assert limiter.is_limited("login:2.2.2.2", 5, 10_000) is False


def test_clear_key_and_clear_all():
    limiter = InMemoryRateLimiter(clock=FakeClock())
    for _ in range(6):
        limiter.is_limited("a", 5, 10_000)
        limiter.is_limited("b", 5, 10_000)

    limiter.clear_key("a")
    assert limiter.is_limited("a", 5, 10_000) is False
    assert limiter.is_limited("b", 5, 10_000) is True

    limiter.clear_all()
    assert limiter.is_limited("b", 5, 10_000) is False


def test_idle_keys_are_dropped():
    clock = FakeClock()
    limiter = InMemoryRateLimiter(clock=clock)
    for ip in ("1.1.1.1", "2.2.2.2", "3.3.3.3"):
        limiter.is_limited(f"login:{ip}", 5, 10_000)
    assert len(limiter) == 3

    clock.now += 11

    assert limiter.is_limited("login:4.4.4.4", 5, 10_000) is False
    assert len(limiter) == 1


def test_active_keys_survive_the_sweep():
    clock = FakeClock()
    limiter = InMemoryRateLimiter(clock=clock)
    for _ in range(5):
        limiter.is_limited("login:1.1.1.1", 5, 10_000)

    clock.now += 10
    limiter.is_limited("login:2.2.2.2", 5, 10_000)

    assert len(limiter) == 2
    assert limiter.is_limited("login:1.1.1.1", 5, 10_000) is True
