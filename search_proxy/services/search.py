"""Brave Search integration with fail-soft fallback content."""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from search_proxy.config import SearchProviderSettings
from search_proxy.domain.models import Article, SearchResponse
from search_proxy.logging import logger
from search_proxy.services.exceptions import (
    UpstreamEmpty,
    UpstreamError,
    UpstreamMalformed,
    UpstreamUnavailable,
)
from search_proxy.services.fallback import EMPTY_RESULTS_TITLE, FAILURE_TITLE, FallbackArticles
from search_proxy.utils.result import Err, Ok, Result, unwrap_or_else

ERROR_BODY_CHAR_LIMIT = 500


class BraveSearchClient:
    """Single-attempt client for the Brave web search endpoint."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        settings: SearchProviderSettings | None = None,
    ) -> None:
        self._client = http_client
        self._settings = settings or SearchProviderSettings()

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        api_key = self._settings.api_key
        if api_key:
            headers["X-Subscription-Token"] = api_key.get_secret_value()
        return headers

    async def fetch(self, query: str) -> Result[list[Article], UpstreamError]:
        params = {"q": query, "count": self._settings.result_count}
        url = str(self._settings.base_url)
        logger.info(
            "brave_search_request",
            url=url,
            query=query,
            count=self._settings.result_count,
            api_key_present=self._settings.api_key is not None,
        )

        try:
            response = await self._client.get(
                url,
                params=params,
                headers=self._headers(),
                timeout=self._settings.timeout_seconds,
            )
        except httpx.TimeoutException as exc:
            return Err(UpstreamUnavailable(f"Brave Search request timed out: {exc!r}"))
        except httpx.RequestError as exc:
            return Err(UpstreamUnavailable(f"Brave Search request failed: {exc}"))

        if not response.is_success:
            body = response.text[:ERROR_BODY_CHAR_LIMIT]
            logger.error(
                "brave_search_error",
                status=response.status_code,
                status_text=response.reason_phrase,
                headers=dict(response.headers),
                body=body,
            )
            return Err(UpstreamUnavailable(f"Brave Search API error: {response.status_code} - {body}"))

        try:
            articles = parse_results(response.json())
        except (ValueError, TypeError, AttributeError) as exc:
            return Err(UpstreamMalformed(f"Unexpected Brave Search payload: {exc}"))

        if not articles:
            return Err(UpstreamEmpty("Brave Search returned no results"))
        return Ok(articles)


def parse_results(data: Any) -> list[Article]:
    """Map ``web.results`` of a Brave payload onto articles, keeping order."""

    web = data.get("web") or {}
    results = web.get("results") or []
    articles: list[Article] = []
    for item in results:
        try:
            articles.append(
                Article(
                    title=item.get("title") or "",
                    content=item.get("description") or item.get("snippet") or "",
                    url=item.get("url") or "",
                    published=item.get("age") or "recent",
                )
            )
        except ValidationError as exc:
            raise ValueError(f"invalid search result entry: {exc}") from exc
    return articles


class SearchService:
    """Turns a query into a non-empty response; provider failures become fallback articles."""

    def __init__(
        self,
        client: BraveSearchClient,
        fallback: FallbackArticles | None = None,
        *,
        combine_domain_into_query: bool = False,
    ) -> None:
        self._client = client
        self._fallback = fallback or FallbackArticles()
        self.combine_domain_into_query = combine_domain_into_query

    def build_query(self, query: str, domain: str | None = None) -> str:
        if self.combine_domain_into_query and domain:
            return f"{query} {domain}"
        return query

    async def search(self, query: str, domain: str | None = None) -> SearchResponse:
        search_query = self.build_query(query, domain)
        try:
            outcome = await self._client.fetch(search_query)
        except Exception as exc:
            logger.exception("brave_search_unhandled_error", query=search_query)
            outcome = Err(UpstreamUnavailable(str(exc)))

        articles = unwrap_or_else(outcome, self._fallback_for)
        logger.info("search_completed", query=search_query, articles=len(articles))
        return SearchResponse(articles=articles)

    def _fallback_for(self, error: UpstreamError) -> list[Article]:
        title = EMPTY_RESULTS_TITLE if isinstance(error, UpstreamEmpty) else FAILURE_TITLE
        logger.warning(
            "search_fallback_used",
            reason=error.__class__.__name__,
            detail=str(error),
            title=title,
        )
        return [self._fallback.pick(title)]


__all__ = ["BraveSearchClient", "SearchService", "parse_results"]
