"""Degrading provider — Capability checks and fallbacks around one provider.

``DegradingProvider`` is what a provider adapter holds on to: it knows the
provider's capability matrix, applies the configured degradation strategy
before dispatch (``validate_query`` / ``ensure_supported``) and repairs the
results afterwards (``process_search_results``). It never performs I/O; the
adapter passes in the results of its own network calls.

Usage::

    provider = DegradingProvider("typesense")
    report = provider.validate_query(query)
    results = await adapter.search(query)
    provider.process_search_results(results, query)
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from unisearch.adapters.base.capabilities import ProviderCapabilities
from unisearch.capabilities.checker import (
    CapabilityChecker,
    LimitedSupport,
    PerformanceLimit,
    QuerySupportResult,
    UnsupportedFeature,
)
from unisearch.capabilities.matrix import CapabilityMatrix, get_capability_matrix
from unisearch.capabilities.support import (
    DegradationStrategy,
    FeatureSupport,
    GeoSearchFallback,
    StreamingFallbackPolicy,
    VectorSearchFallback,
)
from unisearch.exceptions import UnsupportedFeatureError
from unisearch.fallbacks.detector import FeatureDetector
from unisearch.fallbacks.processor import FallbackProcessor
from unisearch.fallbacks.streaming import FetchPage, StreamingFallback
from unisearch.models.document import Doc, batch_documents
from unisearch.models.query import SearchQuery
from unisearch.models.result import SearchHit, SearchResults

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100


class DegradingProvider(ProviderCapabilities):
    """Graceful-degradation layer for one of the supported providers.

    Args:
        provider: Provider identifier (``"algolia"``, ``"elasticsearch"``,
            ``"opensearch"``, ``"typesense"`` or ``"meilisearch"``).
        strategy: Degradation strategy; defaults to ``DegradationStrategy()``.
        matrix: Override for the built-in capability matrix, e.g. one with
            a detected ``provider_version``.
        stream_page_size: Page size used when streaming is emulated.
        stream_max_pages: Page cap used when streaming is emulated.
    """

    def __init__(
        self,
        provider: str,
        strategy: DegradationStrategy | None = None,
        matrix: CapabilityMatrix | None = None,
        stream_page_size: int = 100,
        stream_max_pages: int | None = None,
    ) -> None:
        self._matrix = matrix or get_capability_matrix(provider)
        self._strategy = strategy or DegradationStrategy()
        self._checker = CapabilityChecker(self._matrix, self._strategy)
        self._processor = FallbackProcessor(self._strategy)
        self._streaming = StreamingFallback(stream_page_size, stream_max_pages)

    @property
    def name(self) -> str:
        return self._matrix.provider_name

    def get_capability_matrix(self) -> CapabilityMatrix:
        return self._matrix

    def get_degradation_strategy(self) -> DegradationStrategy:
        return self._strategy

    # ── Before dispatch ──────────────────────────────────────────────────

    def validate_query(self, query: SearchQuery) -> QuerySupportResult:
        return self._checker.check_query_support(query)

    def ensure_supported(self, query: SearchQuery) -> None:
        """Apply the vector and geo policies to ``query``.

        Raises:
            UnsupportedFeatureError: If the query needs vector or geo search,
                the provider lacks it, and the strategy forbids degrading.
        """
        if FeatureDetector.uses_vector_search(query):
            self._check_policy(
                "vector_search",
                self._strategy.vector_search_fallback is VectorSearchFallback.ERROR,
                "falling back to text search",
            )
        if FeatureDetector.uses_geo_search(query):
            self._check_policy(
                "geo_search",
                self._strategy.geo_search_fallback is GeoSearchFallback.ERROR,
                "falling back to bounding-box filtering",
            )

    def get_feature_recommendations(self, query: SearchQuery) -> list[str]:
        """Human-readable suggestions derived from ``validate_query``."""
        report = self.validate_query(query)
        recommendations: list[str] = []
        for issue in report.issues:
            if isinstance(issue, UnsupportedFeature):
                recommendations.append(
                    f"Feature '{issue.feature}' is not supported by {self.name}; "
                    f"results will use the '{issue.fallback}' fallback"
                )
            elif isinstance(issue, LimitedSupport):
                recommendations.append(f"Feature '{issue.feature}' has limitations: {issue.limitation}")
            elif isinstance(issue, PerformanceLimit):
                recommendations.append(
                    f"Parameter '{issue.parameter}' requested value '{issue.requested}' "
                    f"exceeds limit '{issue.limit}'. Consider reducing the value."
                )
        return recommendations

    def log_capability_info(self, query: SearchQuery) -> QuerySupportResult:
        report = self.validate_query(query)
        if not report.is_fully_supported:
            logger.warning("Query not fully supported by %s. Issues found:", self.name)
            for issue in report.issues:
                logger.warning("  - %s", issue.model_dump())
        if report.requires_fallback:
            logger.info("Query requires fallback mechanisms for %s", self.name)
        return report

    def plan_batches(self, docs: list[Doc], max_bytes: int) -> list[list[Doc]]:
        """Split documents into bulk requests within the provider's batch limit.

        Uses ``max_batch_size`` from the performance limits, or 100 documents
        when the provider declares none.
        """
        max_batch_size = self._matrix.performance_limits.max_batch_size or DEFAULT_BATCH_SIZE
        batches = batch_documents(docs, max_batch_size, max_bytes)
        logger.debug("Split %d documents into %d batches for %s", len(docs), len(batches), self.name)
        return batches

    # ── After dispatch ───────────────────────────────────────────────────

    def process_search_results(self, results: SearchResults, query: SearchQuery) -> None:
        self._processor.process_search_results(results, query, self._matrix.feature_map())

    async def stream_search(self, query: SearchQuery, fetch_page: FetchPage) -> AsyncIterator[SearchHit]:
        """Stream hits, emulating the stream with pages when needed.

        Providers with native streaming should use their own cursor API;
        this method is the fallback path and still honours the strategy.

        Raises:
            UnsupportedFeatureError: If streaming must be emulated but the
                strategy forbids it.
        """
        support = self._matrix.advanced_features.streaming_search
        if support is not FeatureSupport.NATIVE:
            self._check_policy(
                "streaming_search",
                self._strategy.streaming_fallback is StreamingFallbackPolicy.ERROR,
                "emulating with pagination",
            )
        async for hit in self._streaming.stream(query, fetch_page):
            yield hit

    def _check_policy(self, feature: str, refuse: bool, fallback: str) -> None:
        support = self._matrix.feature_support(feature)
        if support is FeatureSupport.NATIVE:
            return
        if support is FeatureSupport.UNSUPPORTED and (refuse or self._strategy.strict_mode):
            raise UnsupportedFeatureError(feature)
        if self._strategy.log_unsupported_warnings:
            logger.warning("%s is %s on %s - %s", feature, support.value, self.name, fallback)
