"""Sliding-window rate limiter behaviour."""

from __future__ import annotations

import pytest

from search_proxy.config import RequestLimitSettings
from search_proxy.services.exceptions import RateLimitExceeded
from search_proxy.services.rate_limit import InMemoryRateLimiter, RateLimiter


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


def test_limiter_blocks_after_quota():
    clock = FakeClock()
    limiter = InMemoryRateLimiter(RequestLimitSettings(max_requests=2, interval_seconds=60), clock=clock)

    assert limiter.hit("a") is True
    assert limiter.hit("a") is True
    assert limiter.hit("a") is False
    assert limiter.hit("b") is True


def test_limiter_window_slides():
    clock = FakeClock()
    limiter = InMemoryRateLimiter(RequestLimitSettings(max_requests=1, interval_seconds=60), clock=clock)

    assert limiter.hit("a") is True
    clock.now += 59
    assert limiter.hit("a") is False
    clock.now += 1
    assert limiter.hit("a") is True


def test_rejected_requests_do_not_extend_window():
    clock = FakeClock()
    limiter = InMemoryRateLimiter(RequestLimitSettings(max_requests=1, interval_seconds=10), clock=clock)

    limiter.hit("a")
    for _ in range(5):
        clock.now += 1
        assert limiter.hit("a") is False
    clock.now += 5
    assert limiter.hit("a") is True


def test_zero_quota_disables_limiting():
    limiter = InMemoryRateLimiter(RequestLimitSettings(max_requests=0))
    assert all(limiter.hit("a") for _ in range(100))


def test_default_quota_is_sixty_per_minute():
    limiter = InMemoryRateLimiter(clock=FakeClock())
    assert all(limiter.hit("a") for _ in range(60))
    assert limiter.hit("a") is False

    limiter.reset()
    assert limiter.hit("a") is True


def test_rate_limiter_raises_and_prefixes_keys():
    seen: list[str] = []

    class Backend:
        def hit(self, key: str) -> bool:
            seen.append(key)
            return len(seen) < 2

    limiter = RateLimiter(Backend())
    limiter.check("10.0.0.1")
    with pytest.raises(RateLimitExceeded) as excinfo:
        limiter.check("10.0.0.1")

    assert seen == ["rate_limit_10.0.0.1", "rate_limit_10.0.0.1"]
    assert excinfo.value.status_code == 429
    assert excinfo.value.message == "Rate limit exceeded. Please try again later."


def test_idle_keys_are_swept_after_window():
    clock = FakeClock(0.0)
    limiter = InMemoryRateLimiter(RequestLimitSettings(max_requests=5, interval_seconds=1), clock=clock)

    for index in range(1000):
        limiter.hit(f"spoofed-{index}")
    assert limiter.tracked_keys() == 1000

    clock.now = 10000.0
    assert limiter.hit("fresh") is True
    assert limiter.tracked_keys() == 1


def test_sweep_keeps_clients_still_inside_window():
    clock = FakeClock(0.0)
    limiter = InMemoryRateLimiter(RequestLimitSettings(max_requests=1, interval_seconds=10), clock=clock)

    limiter.hit("old")
    clock.now = 5.0
    limiter.hit("recent")
    clock.now = 12.0
    assert limiter.hit("other") is True

    assert limiter.tracked_keys() == 2
    assert limiter.hit("recent") is False
