"""Capability matrices, degradation strategies and query checking."""

from unisearch.capabilities.checker import (
    CapabilityChecker,
    CompatibilityIssue,
    ConditionalSupport,
    LimitedSupport,
    PerformanceLimit,
    QuerySupportResult,
    RequiresFallback,
    UnsupportedFeature,
)
from unisearch.capabilities.matrix import (
    AdvancedFeatures,
    CapabilityMatrix,
    CoreCapabilities,
    PerformanceLimits,
    algolia_capability_matrix,
    elasticsearch_capability_matrix,
    get_capability_matrix,
    known_providers,
    meilisearch_capability_matrix,
    opensearch_capability_matrix,
    resolve_provider,
    typesense_capability_matrix,
)
from unisearch.capabilities.support import (
    DegradationStrategy,
    FacetFallback,
    FeatureSupport,
    GeoSearchFallback,
    HighlightFallback,
    StreamingFallbackPolicy,
    VectorSearchFallback,
)

__all__ = [
    "AdvancedFeatures",
    "CapabilityChecker",
    "CapabilityMatrix",
    "CompatibilityIssue",
    "ConditionalSupport",
    "CoreCapabilities",
    "DegradationStrategy",
    "FacetFallback",
    "FeatureSupport",
    "GeoSearchFallback",
    "HighlightFallback",
    "LimitedSupport",
    "PerformanceLimit",
    "PerformanceLimits",
    "QuerySupportResult",
    "RequiresFallback",
    "StreamingFallbackPolicy",
    "UnsupportedFeature",
    "VectorSearchFallback",
    "algolia_capability_matrix",
    "elasticsearch_capability_matrix",
    "get_capability_matrix",
    "known_providers",
    "meilisearch_capability_matrix",
    "opensearch_capability_matrix",
    "resolve_provider",
    "typesense_capability_matrix",
]
