"""Streaming fallback — Emulates a hit stream with paginated queries.

Providers without a scroll/cursor API (Typesense, Meilisearch, Algolia)
cannot stream results. ``StreamingFallback`` turns one streaming request into
a bounded series of page queries and stitches the pages back together.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable

from unisearch.models.query import SearchQuery
from unisearch.models.result import SearchHit, SearchResults

logger = logging.getLogger(__name__)

DEFAULT_MAX_PAGES = 10

FetchPage = Callable[[SearchQuery], Awaitable[SearchResults]]


class StreamingFallback:
    """Pagination-based stream emulation.

    Args:
        page_size: Hits requested per page.
        max_pages: Upper bound on generated page queries (default 10).
    """

    def __init__(self, page_size: int, max_pages: int | None = None) -> None:
        self._page_size = page_size
        self._max_pages = max_pages

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def max_pages(self) -> int:
        return self._max_pages if self._max_pages is not None else DEFAULT_MAX_PAGES

    def paginate_query(self, query: SearchQuery) -> list[SearchQuery]:
        """Expand ``query`` into page queries ``0 .. max_pages - 1``."""
        return [
            query.model_copy(update={"page": page, "per_page": self._page_size})
            for page in range(self.max_pages)
        ]

    def combine_results(self, page_results: list[SearchResults]) -> SearchResults:
        """Concatenate pages into one result set.

        ``total`` and ``facets`` come from the first page, ``took_ms`` is the
        sum over all pages and ``per_page`` is the combined hit count.
        """
        if not page_results:
            return SearchResults(
                total=0,
                page=0,
                per_page=self._page_size,
                hits=[],
                facets=None,
                took_ms=0,
            )

        first = page_results[0]
        hits: list[SearchHit] = []
        took_ms = 0
        for result in page_results:
            hits.extend(hit.model_copy() for hit in result.hits)
            took_ms += result.took_ms or 0

        return SearchResults(
            total=first.total,
            page=0,
            per_page=len(hits),
            hits=hits,
            facets=first.facets,
            took_ms=took_ms,
        )

    async def stream(self, query: SearchQuery, fetch_page: FetchPage) -> AsyncIterator[SearchHit]:
        """Yield hits page by page until a short page or ``max_pages``.

        Args:
            query: The streaming request.
            fetch_page: Coroutine executing one page query against the
                provider (supplied by the adapter).
        """
        for page_query in self.paginate_query(query):
            results = await fetch_page(page_query)
            for hit in results.hits:
                yield hit
            if len(results.hits) < self._page_size:
                return
        logger.info("Stream for %r stopped after %d pages", query.q, self.max_pages)
