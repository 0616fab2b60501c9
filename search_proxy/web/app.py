"""FastAPI application factory."""

from __future__ import annotations

import random
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from search_proxy.config import ProxySettings, get_settings
from search_proxy.logging import logger
from search_proxy.services.exceptions import MethodNotAllowed
from search_proxy.services.fallback import FallbackArticles
from search_proxy.services.rate_limit import InMemoryRateLimiter, RateLimitBackend, RateLimiter
from search_proxy.services.search import BraveSearchClient, SearchService
from search_proxy.web.handler import SearchProxyHandler
from search_proxy.web.routers import setup_routers


def build_handler(
    settings: ProxySettings,
    http_client: httpx.AsyncClient,
    *,
    rate_limit_backend: RateLimitBackend | None = None,
    rng: random.Random | None = None,
) -> SearchProxyHandler:
    backend = rate_limit_backend or InMemoryRateLimiter(settings.request_limit)
    search_service = SearchService(
        BraveSearchClient(http_client, settings=settings.search),
        FallbackArticles(rng),
        combine_domain_into_query=settings.search.combine_domain_into_query,
    )
    return SearchProxyHandler(RateLimiter(backend), search_service)


async def _http_error(request: Request, exc: StarletteHTTPException):
    # Methods outside the routed set are rejected by the router itself.
    if exc.status_code == MethodNotAllowed.status_code:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": MethodNotAllowed.default_message},
            headers=exc.headers,
        )
    return await http_exception_handler(request, exc)


def create_app(
    settings: ProxySettings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    rate_limit_backend: RateLimitBackend | None = None,
    rng: random.Random | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    owns_client = http_client is None
    client = http_client or httpx.AsyncClient()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("proxy_starting", environment=settings.environment)
        try:
            yield
        finally:
            if owns_client:
                await client.aclose()

    app = FastAPI(title="Search Proxy", lifespan=lifespan)
    app.state.search_handler = build_handler(
        settings,
        client,
        rate_limit_backend=rate_limit_backend,
        rng=rng,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allow_origins,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.include_router(setup_routers())
    return app


__all__ = ["build_handler", "create_app"]
