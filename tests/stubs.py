"""Reusable doubles for outbound Brave Search traffic."""

from __future__ import annotations

from typing import Callable

import httpx


class RecordingTransport(httpx.MockTransport):
    """Mock transport that remembers every outbound request."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


def brave_payload(*results: dict) -> dict:
    return {"type": "search", "web": {"type": "search", "results": list(results)}}
