"""Query models — The provider-independent search request.

A ``SearchQuery`` is built once (usually through ``QueryBuilder``) and then
treated as a value: degradation checks and pagination emulation derive new
queries with ``model_copy`` instead of mutating the original.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class HighlightConfig(BaseModel):
    """Highlighting options requested by the caller."""

    model_config = {"frozen": True}

    fields: list[str] = Field(default_factory=list, description="Document fields to highlight")
    pre_tag: str | None = Field(default=None, description="Markup inserted before a matched term")
    post_tag: str | None = Field(default=None, description="Markup inserted after a matched term")
    max_length: int | None = Field(default=None, ge=0, description="Maximum snippet length in characters")


class QueryConfig(BaseModel):
    """Provider-tuning options attached to a query."""

    model_config = {"frozen": True}

    timeout_ms: int | None = Field(default=None, ge=0, description="Per-query timeout in milliseconds")
    boost_fields: list[tuple[str, float]] = Field(default_factory=list, description="(field, boost) pairs")
    attributes_to_retrieve: list[str] = Field(default_factory=list, description="Fields to return per hit")
    language: str | None = Field(default=None, description="Query language code")
    typo_tolerance: bool | None = Field(default=None, description="Enable typo-tolerant matching")
    exact_match_boost: float | None = Field(default=None, description="Boost applied to exact matches")
    provider_params: str | None = Field(
        default=None,
        description="JSON-encoded provider-specific parameters, passed through untouched",
    )


class SearchQuery(BaseModel):
    """A search request in the common model shared by all providers."""

    model_config = {"frozen": True}

    q: str | None = Field(default=None, description="Free-text query")
    filters: list[str] = Field(default_factory=list, description="Filter expressions (provider syntax)")
    sort: list[str] = Field(default_factory=list, description="Sort expressions (provider syntax)")
    facets: list[str] = Field(default_factory=list, description="Fields to compute facet counts for")
    page: int | None = Field(default=None, ge=0, description="Zero-based page number")
    per_page: int | None = Field(default=None, ge=0, description="Hits per page (or limit with offset)")
    offset: int | None = Field(default=None, ge=0, description="Offset for offset/limit pagination")
    highlight: HighlightConfig | None = Field(default=None, description="Highlighting options")
    config: QueryConfig | None = Field(default=None, description="Provider-tuning options")


class QueryBuilder:
    """Fluent builder producing an immutable ``SearchQuery``.

    Example:
        >>> query = (
        ...     QueryBuilder()
        ...     .query("wireless headphones")
        ...     .filter("in_stock:true")
        ...     .facet("brand")
        ...     .page(0, 20)
        ...     .build()
        ... )
    """

    def __init__(self) -> None:
        self._q: str | None = None
        self._filters: list[str] = []
        self._sort: list[str] = []
        self._facets: list[str] = []
        self._page: int | None = None
        self._per_page: int | None = None
        self._offset: int | None = None
        self._highlight: HighlightConfig | None = None
        self._config: QueryConfig | None = None

    def query(self, q: str) -> QueryBuilder:
        self._q = q
        return self

    def filter(self, expression: str) -> QueryBuilder:
        self._filters.append(expression)
        return self

    def filters(self, expressions: list[str]) -> QueryBuilder:
        self._filters.extend(expressions)
        return self

    def sort(self, expression: str) -> QueryBuilder:
        self._sort.append(expression)
        return self

    def sorts(self, expressions: list[str]) -> QueryBuilder:
        self._sort.extend(expressions)
        return self

    def facet(self, field: str) -> QueryBuilder:
        self._facets.append(field)
        return self

    def page(self, page: int, per_page: int) -> QueryBuilder:
        self._page = page
        self._per_page = per_page
        return self

    def offset(self, offset: int, limit: int) -> QueryBuilder:
        """Use offset/limit pagination; ``limit`` is stored as ``per_page``."""
        self._offset = offset
        self._per_page = limit
        return self

    def highlight(self, config: HighlightConfig) -> QueryBuilder:
        self._highlight = config
        return self

    def config(self, config: QueryConfig) -> QueryBuilder:
        self._config = config
        return self

    def build(self) -> SearchQuery:
        return SearchQuery(
            q=self._q,
            filters=list(self._filters),
            sort=list(self._sort),
            facets=list(self._facets),
            page=self._page,
            per_page=self._per_page,
            offset=self._offset,
            highlight=self._highlight,
            config=self._config,
        )
