"""Shared test fixtures and configuration."""

from __future__ import annotations

import json

import pytest

from unisearch.capabilities.support import DegradationStrategy, FeatureSupport
from unisearch.models.query import HighlightConfig, SearchQuery
from unisearch.models.result import SearchHit, SearchResults


@pytest.fixture
def strategy() -> DegradationStrategy:
    """Default degradation strategy."""
    return DegradationStrategy()


@pytest.fixture
def product_hits() -> list[SearchHit]:
    """Three product hits with category, tags and a description."""
    return [
        SearchHit(
            id="1",
            score=1.0,
            content=json.dumps(
                {
                    "category": "books",
                    "price": 10,
                    "tags": ["paper", "fiction"],
                    "description": "Rust is a great programming language for systems programming",
                }
            ),
        ),
        SearchHit(
            id="2",
            score=0.8,
            content=json.dumps({"category": "books", "price": 15, "tags": ["fiction"], "in_stock": True}),
        ),
        SearchHit(
            id="3",
            score=0.6,
            content=json.dumps(
                {"category": "electronics", "price": 100, "description": "A laptop built for programming"}
            ),
        ),
    ]


@pytest.fixture
def product_results(product_hits: list[SearchHit]) -> SearchResults:
    """Provider results without facets, total or timing."""
    return SearchResults(hits=product_hits)


@pytest.fixture
def facet_query() -> SearchQuery:
    return SearchQuery(q="books", facets=["category"])


@pytest.fixture
def highlight_query() -> SearchQuery:
    return SearchQuery(
        q="rust programming",
        highlight=HighlightConfig(fields=["description"], pre_tag="<mark>", post_tag="</mark>", max_length=100),
    )


@pytest.fixture
def unsupported_features() -> dict[str, FeatureSupport]:
    """Feature map of a provider with neither facets nor highlighting."""
    return {
        "faceted_search": FeatureSupport.UNSUPPORTED,
        "highlighting": FeatureSupport.UNSUPPORTED,
    }


@pytest.fixture
def native_features() -> dict[str, FeatureSupport]:
    return {
        "faceted_search": FeatureSupport.NATIVE,
        "highlighting": FeatureSupport.NATIVE,
    }
