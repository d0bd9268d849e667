"""unisearch — Capability matrices and graceful degradation for hosted search providers.

Provider adapters for Algolia, Elasticsearch, OpenSearch, Typesense and
Meilisearch share one query/result model. This package declares what each
provider supports, checks queries against those declarations and repairs
results client-side when a provider lacks a feature.
"""

from unisearch.adapters.base import DegradingProvider, ProviderCapabilities
from unisearch.capabilities import (
    CapabilityChecker,
    CapabilityMatrix,
    DegradationStrategy,
    FeatureSupport,
    QuerySupportResult,
    get_capability_matrix,
)
from unisearch.exceptions import InternalError, SearchError, UnsupportedFeatureError
from unisearch.fallbacks import FallbackProcessor, FeatureDetector, PerformanceImpact, StreamingFallback
from unisearch.models import HighlightConfig, QueryBuilder, SearchHit, SearchQuery, SearchResults

__version__ = "0.1.0"

__all__ = [
    "CapabilityChecker",
    "CapabilityMatrix",
    "DegradationStrategy",
    "DegradingProvider",
    "FallbackProcessor",
    "FeatureDetector",
    "FeatureSupport",
    "HighlightConfig",
    "InternalError",
    "PerformanceImpact",
    "ProviderCapabilities",
    "QueryBuilder",
    "QuerySupportResult",
    "SearchError",
    "SearchHit",
    "SearchQuery",
    "SearchResults",
    "StreamingFallback",
    "UnsupportedFeatureError",
    "get_capability_matrix",
]
