"""Admission, validation and dispatch behaviour of the proxy handler."""

from __future__ import annotations

import pytest

from search_proxy.domain.models import Article, SearchResponse
from search_proxy.services.rate_limit import RateLimiter
from search_proxy.web.handler import SearchProxyHandler


class DummyBackend:
    def __init__(self, allow: bool = True) -> None:
        self.allow = allow
        self.keys: list[str] = []

    def hit(self, key: str) -> bool:
        self.keys.append(key)
        return self.allow


class DummySearchService:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str | None]] = []

    async def search(self, query: str, domain: str | None = None) -> SearchResponse:
        self.calls.append((query, domain))
        return SearchResponse(
            articles=[Article(title="T", content="C", url="https://t", published="recent")]
        )


def _handler(allow: bool = True) -> tuple[SearchProxyHandler, DummyBackend, DummySearchService]:
    backend = DummyBackend(allow)
    service = DummySearchService()
    return SearchProxyHandler(RateLimiter(backend), service), backend, service


@pytest.mark.asyncio
async def test_options_short_circuits():
    handler, backend, service = _handler()
    result = await handler.handle("OPTIONS", None, "1.2.3.4")

    assert (result.status_code, result.body) == (200, {})
    assert backend.keys == []
    assert service.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "patch"])
async def test_other_methods_are_rejected_before_rate_limit(method):
    handler, backend, service = _handler()
    result = await handler.handle(method, {"query": "x"}, "1.2.3.4")

    assert result.status_code == 405
    assert result.body == {"error": "Method not allowed"}
    assert backend.keys == []
    assert service.calls == []


@pytest.mark.asyncio
async def test_rate_limited_request_skips_validation_and_search():
    handler, backend, service = _handler(allow=False)
    result = await handler.handle("POST", {}, "1.2.3.4")

    assert result.status_code == 429
    assert result.body == {"error": "Rate limit exceeded. Please try again later."}
    assert backend.keys == ["rate_limit_1.2.3.4"]
    assert service.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload, message",
    [
        (None, "query is required"),
        ({"query": ""}, "query is required"),
        ({"query": ["a"]}, "query must be a string"),
        ({"query": "x" * 201}, "query must be less than 200 characters"),
    ],
)
async def test_invalid_payloads_are_client_errors(payload, message):
    handler, _, service = _handler()
    result = await handler.handle("POST", payload, "1.2.3.4")

    assert result.status_code == 400
    assert result.body == {"error": message}
    assert service.calls == []


@pytest.mark.asyncio
async def test_valid_request_is_sanitized_and_searched():
    handler, _, service = _handler()
    result = await handler.handle(
        "POST",
        {"query": "  <b>climate</b> news\n", "domain": "<i>bbc.com</i>"},
        "1.2.3.4",
    )

    assert result.status_code == 200
    assert result.body["articles"] == [
        {"title": "T", "content": "C", "url": "https://t", "published": "recent"}
    ]
    assert service.calls == [("bclimate/b news", "ibbc.com/i")]


@pytest.mark.asyncio
async def test_non_string_domain_is_dropped():
    handler, _, service = _handler()
    await handler.handle("POST", {"query": "q", "domain": 12}, "1.2.3.4")
    assert service.calls == [("q", None)]


@pytest.mark.asyncio
async def test_unexpected_admission_failure_becomes_500():
    class BrokenBackend:
        def hit(self, key: str) -> bool:
            raise RuntimeError("storage down")

    handler = SearchProxyHandler(RateLimiter(BrokenBackend()), DummySearchService())
    result = await handler.handle("POST", {"query": "q"}, "1.2.3.4")

    assert result.status_code == 500
    assert result.body == {"error": "Internal server error"}
