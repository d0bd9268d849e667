"""Result models — The provider-independent search response.

``SearchResults`` is the one mutable model in the package: the fallback
processor fills in facets, highlights, ``total`` and ``took_ms`` in place
while the caller holds exclusive ownership of the object.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class SearchHit(BaseModel):
    """A single matching document."""

    id: str = Field(description="Document identifier")
    score: float | None = Field(default=None, description="Relevance score reported by the provider")
    content: str | None = Field(default=None, description="JSON-encoded document body")
    highlights: str | None = Field(default=None, description="JSON-encoded map of field -> snippets")


class SearchResults(BaseModel):
    """A page of hits plus optional aggregate information."""

    total: int | None = Field(default=None, ge=0, description="Total number of matching documents")
    page: int | None = Field(default=None, ge=0, description="Page number of this result set")
    per_page: int | None = Field(default=None, ge=0, description="Page size of this result set")
    hits: list[SearchHit] = Field(default_factory=list, description="Ordered hits")
    facets: str | None = Field(default=None, description="JSON-encoded map of field -> value -> count")
    took_ms: int | None = Field(default=None, ge=0, description="Provider processing time in ms")
