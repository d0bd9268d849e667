"""Feature detection — Cheap heuristics over a ``SearchQuery``.

These checks are substring based on purpose; they do not parse provider
filter syntax.
"""

from __future__ import annotations

import json
from enum import IntEnum

from unisearch.models.query import SearchQuery

_VECTOR_KEYS = ("vector", "embedding", "semantic")
_GEO_MARKERS = ("geo_distance", "geo_bounding_box", "latitude", "longitude")


class PerformanceImpact(IntEnum):
    """Estimated cost of running fallbacks, ordered LOW < MEDIUM < HIGH."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3


class FeatureDetector:
    """Detects advanced features a query relies on."""

    @staticmethod
    def uses_vector_search(query: SearchQuery) -> bool:
        if query.config is None or not query.config.provider_params:
            return False
        try:
            params = json.loads(query.config.provider_params)
        except json.JSONDecodeError:
            return False
        return isinstance(params, dict) and any(key in params for key in _VECTOR_KEYS)

    @staticmethod
    def uses_geo_search(query: SearchQuery) -> bool:
        return any(marker in f for f in query.filters for marker in _GEO_MARKERS)

    @staticmethod
    def uses_advanced_aggregations(query: SearchQuery) -> bool:
        return len(query.facets) > 5 or any("nested" in f for f in query.facets)

    @staticmethod
    def estimate_fallback_performance_impact(
        query: SearchQuery,
        unsupported_features: list[str],
    ) -> PerformanceImpact:
        """Estimate the worst-case cost of emulating ``unsupported_features``.

        Facets scale with the number requested (up to 3 low, up to 10
        medium, more high); highlighting is low, streaming medium, vector
        search high and anything else medium.
        """
        impact = PerformanceImpact.LOW
        for feature in unsupported_features:
            if feature == "faceted_search":
                if len(query.facets) > 10:
                    cost = PerformanceImpact.HIGH
                elif len(query.facets) > 3:
                    cost = PerformanceImpact.MEDIUM
                else:
                    cost = PerformanceImpact.LOW
            elif feature == "highlighting":
                cost = PerformanceImpact.LOW
            elif feature == "streaming_search":
                cost = PerformanceImpact.MEDIUM
            elif feature == "vector_search":
                cost = PerformanceImpact.HIGH
            else:
                cost = PerformanceImpact.MEDIUM
            impact = max(impact, cost)
        return impact
