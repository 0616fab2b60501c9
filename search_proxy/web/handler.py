"""Search proxy request pipeline: admission, validation, upstream fetch."""

from __future__ import annotations

from time import perf_counter
from typing import Any, Mapping

from search_proxy.domain.models import HandlerResponse, SearchRequest
from search_proxy.logging import logger
from search_proxy.services.exceptions import MethodNotAllowed, ServiceError
from search_proxy.services.rate_limit import RateLimiter
from search_proxy.services.search import SearchService
from search_proxy.services.validation import SEARCH_SCHEMA, ensure_valid, sanitize_input

INTERNAL_ERROR_MESSAGE = "Internal server error"


class SearchProxyHandler:
    def __init__(self, rate_limiter: RateLimiter, search_service: SearchService) -> None:
        self.rate_limiter = rate_limiter
        self.search_service = search_service

    async def handle(
        self,
        method: str,
        payload: Mapping[str, Any] | None,
        client_id: str,
    ) -> HandlerResponse:
        method = method.upper()
        if method == "OPTIONS":
            return HandlerResponse(200, {})

        started = perf_counter()
        try:
            self.admit(method, client_id)
            request = self.validate(payload or {})
        except ServiceError as exc:
            logger.info(
                "search_request_rejected",
                reason=exc.__class__.__name__,
                status=exc.status_code,
                client=client_id,
            )
            return HandlerResponse(exc.status_code, {"error": exc.message})
        except Exception:
            logger.exception("search_request_failed", client=client_id)
            return HandlerResponse(500, {"error": INTERNAL_ERROR_MESSAGE})

        logger.info(
            "search_request_received",
            query=request.query,
            domain=request.domain,
            client=client_id,
        )
        response = await self.search_service.search(request.query, request.domain)
        logger.info(
            "search_request_served",
            client=client_id,
            articles=len(response.articles),
            elapsed_ms=round((perf_counter() - started) * 1000, 2),
        )
        return HandlerResponse(200, response.model_dump())

    def admit(self, method: str, client_id: str) -> None:
        if method != "POST":
            raise MethodNotAllowed()
        self.rate_limiter.check(client_id)

    @staticmethod
    def validate(payload: Mapping[str, Any]) -> SearchRequest:
        ensure_valid(payload, SEARCH_SCHEMA)
        domain = payload.get("domain")
        return SearchRequest(
            query=sanitize_input(payload["query"]),
            domain=sanitize_input(domain) if isinstance(domain, str) else None,
        )


__all__ = ["SearchProxyHandler"]
