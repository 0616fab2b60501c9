"""Pydantic models shared across the handler and service layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    query: str
    domain: str | None = None


class Article(BaseModel):
    title: str
    content: str
    url: str
    published: str


class SearchResponse(BaseModel):
    articles: list[Article] = Field(..., min_length=1)


@dataclass(slots=True)
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)


@dataclass(slots=True)
class HandlerResponse:
    status_code: int
    body: dict[str, Any]


__all__ = [
    "Article",
    "HandlerResponse",
    "SearchRequest",
    "SearchResponse",
    "ValidationResult",
]
