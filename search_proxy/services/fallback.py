"""Static articles served when the search provider gives nothing usable."""

from __future__ import annotations

import random
from typing import Sequence

from search_proxy.domain.models import Article

FALLBACK_URL = "https://example.com/fallback"
EMPTY_RESULTS_TITLE = "Fallback Article"
FAILURE_TITLE = "Fallback Content"

FALLBACK_PARAGRAPHS: tuple[str, ...] = (
    "Recent developments in artificial intelligence have demonstrated remarkable progress in "
    "natural language processing capabilities. The implementation of transformer architectures "
    "has revolutionized how machines understand and generate human-like text. Researchers are "
    "approximately certain that these advances will continue to accelerate. Unfortunately, "
    "computational requirements remain substantial, requiring significant infrastructure "
    "investments.",
    "Machine learning algorithms are increasingly being deployed across various industries to "
    "optimize business processes. The implementation of automated decision-making systems has "
    "shown approximately 40% improvement in operational efficiency. Companies are leveraging "
    "comprehensive data analysis to gain competitive advantages. Unfortunately, the complexity "
    "of these systems often requires specialized expertise for proper implementation.",
    "Scientific research into renewable energy technologies continues to yield promising "
    "results. The development of more efficient solar panels and wind turbines represents "
    "approximately 60% improvement over previous generations. Comprehensive environmental impact "
    "assessments demonstrate substantial benefits. Unfortunately, the initial costs for "
    "implementation remain challenging for many organizations.",
)


class FallbackArticles:
    def __init__(
        self,
        rng: random.Random | None = None,
        paragraphs: Sequence[str] = FALLBACK_PARAGRAPHS,
    ) -> None:
        if not paragraphs:
            raise ValueError("fallback pool must not be empty")
        self._rng = rng or random.Random()
        self._paragraphs = tuple(paragraphs)

    def pick(self, title: str) -> Article:
        return Article(
            title=title,
            content=self._rng.choice(self._paragraphs),
            url=FALLBACK_URL,
            published="recent",
        )


__all__ = [
    "EMPTY_RESULTS_TITLE",
    "FAILURE_TITLE",
    "FALLBACK_PARAGRAPHS",
    "FALLBACK_URL",
    "FallbackArticles",
]
