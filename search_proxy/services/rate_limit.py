"""Sliding-window request quotas keyed by client identity."""

from __future__ import annotations

import time
from collections import deque
from typing import Callable, Deque, Dict, Protocol

from search_proxy.config import RequestLimitSettings
from search_proxy.services.exceptions import RateLimitExceeded


class RateLimitBackend(Protocol):
    def hit(self, key: str) -> bool:
        """Record one request for ``key``; return False once the quota is exhausted."""


class InMemoryRateLimiter:
    """Per-process limiter; rejected requests are not counted.

    Keys come from client-supplied headers, so idle keys are swept once per
    window to keep the map bounded by the number of recently active clients.
    """

    def __init__(
        self,
        settings: RequestLimitSettings | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        settings = settings or RequestLimitSettings()
        self.window_seconds = settings.interval_seconds
        self.max_requests = settings.max_requests
        self._clock = clock
        self._events: Dict[str, Deque[float]] = {}
        self._last_sweep = clock()

    def hit(self, key: str) -> bool:
        if self.max_requests <= 0:
            return True

        now = self._clock()
        if now - self._last_sweep >= self.window_seconds:
            self._sweep(now)

        bucket = self._events.setdefault(key, deque())
        self._prune(bucket, now)

        if len(bucket) >= self.max_requests:
            return False

        bucket.append(now)
        return True

    def _prune(self, bucket: Deque[float], now: float) -> None:
        while bucket and now - bucket[0] >= self.window_seconds:
            bucket.popleft()

    def _sweep(self, now: float) -> None:
        for key in list(self._events):
            bucket = self._events[key]
            self._prune(bucket, now)
            if not bucket:
                del self._events[key]
        self._last_sweep = now

    def tracked_keys(self) -> int:
        return len(self._events)

    def reset(self) -> None:
        self._events.clear()
        self._last_sweep = self._clock()


class RateLimiter:
    def __init__(self, backend: RateLimitBackend) -> None:
        self.backend = backend

    def check(self, client_id: str) -> None:
        if not self.backend.hit(f"rate_limit_{client_id}"):
            raise RateLimitExceeded()


__all__ = ["InMemoryRateLimiter", "RateLimitBackend", "RateLimiter"]
