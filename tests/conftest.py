"""Shared pytest fixtures for the search proxy tests."""

from __future__ import annotations

import pytest
from pydantic import SecretStr

from search_proxy.config import ProxySettings, RequestLimitSettings, SearchProviderSettings


@pytest.fixture
def provider_settings() -> SearchProviderSettings:
    return SearchProviderSettings(api_key=SecretStr("brave-token"))


@pytest.fixture
def settings(provider_settings) -> ProxySettings:
    return ProxySettings(
        search=provider_settings,
        request_limit=RequestLimitSettings(max_requests=5, interval_seconds=60),
    )
