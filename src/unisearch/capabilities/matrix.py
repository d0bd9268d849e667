"""Capability matrices — Declarative per-provider feature tables.

Each provider has exactly one constructor returning a fully populated
``CapabilityMatrix``. The values record what that provider's public API
actually offers; they are maintained by hand, not detected at runtime.

Supported providers:
  - algolia
  - elasticsearch (alias: elastic)
  - opensearch
  - typesense
  - meilisearch
"""

from __future__ import annotations

from collections.abc import Callable

from pydantic import BaseModel, Field

from unisearch.capabilities.support import FeatureSupport
from unisearch.exceptions import InvalidQueryError

N = FeatureSupport.NATIVE
L = FeatureSupport.LIMITED
U = FeatureSupport.UNSUPPORTED
C = FeatureSupport.CONDITIONAL

# Advanced features the fallback layer knows how to reason about.
DEGRADABLE_FEATURES = (
    "faceted_search",
    "highlighting",
    "vector_search",
    "geo_search",
    "streaming_search",
)


class CoreCapabilities(BaseModel):
    """Capabilities every provider is expected to have."""

    full_text_search: FeatureSupport
    keyword_search: FeatureSupport
    index_management: FeatureSupport
    document_operations: FeatureSupport
    schema_management: FeatureSupport
    filtering: FeatureSupport
    pagination: FeatureSupport


class AdvancedFeatures(BaseModel):
    """Features that vary across providers."""

    faceted_search: FeatureSupport
    highlighting: FeatureSupport
    vector_search: FeatureSupport
    geo_search: FeatureSupport
    streaming_search: FeatureSupport
    autocomplete: FeatureSupport
    typo_tolerance: FeatureSupport
    custom_ranking: FeatureSupport
    multilingual: FeatureSupport
    batch_operations: FeatureSupport


class PerformanceLimits(BaseModel):
    """Documented or recommended limits; ``None`` means no fixed limit."""

    max_batch_size: int | None = Field(default=None, description="Documents per batch operation")
    max_query_length: int | None = Field(default=None, description="Query string length")
    max_facets: int | None = Field(default=None, description="Facets per query")
    max_filters: int | None = Field(default=None, description="Filter conditions per query")
    max_results_per_page: int | None = Field(default=None, description="Hits per page")
    default_timeout_seconds: int | None = Field(default=None, description="Default operation timeout")
    rate_limit_rps: int | None = Field(default=None, description="Requests per second")


class CapabilityMatrix(BaseModel):
    """Everything a provider declares about itself."""

    provider_name: str
    provider_version: str | None = None
    core_capabilities: CoreCapabilities
    advanced_features: AdvancedFeatures
    performance_limits: PerformanceLimits
    provider_specific: dict[str, FeatureSupport] = Field(default_factory=dict)

    def feature_support(self, feature: str) -> FeatureSupport:
        """Look up a feature by name.

        Core capabilities and advanced features are checked first, then the
        provider-specific map. Unknown names are ``UNSUPPORTED``.
        """
        if feature in CoreCapabilities.model_fields:
            return getattr(self.core_capabilities, feature)
        if feature in AdvancedFeatures.model_fields:
            return getattr(self.advanced_features, feature)
        return self.provider_specific.get(feature, FeatureSupport.UNSUPPORTED)

    def feature_map(self) -> dict[str, FeatureSupport]:
        """Snapshot of the degradable features, as consumed by ``FallbackProcessor``."""
        return {name: getattr(self.advanced_features, name) for name in DEGRADABLE_FEATURES}


def elasticsearch_capability_matrix() -> CapabilityMatrix:
    return CapabilityMatrix(
        provider_name="elasticsearch",
        core_capabilities=CoreCapabilities(
            full_text_search=N,
            keyword_search=N,
            index_management=N,
            document_operations=N,
            schema_management=N,
            filtering=N,
            pagination=N,
        ),
        advanced_features=AdvancedFeatures(
            faceted_search=N,
            highlighting=N,
            vector_search=C,  # dense_vector / kNN needs plugins or a licensed tier
            geo_search=N,
            streaming_search=N,  # scroll API
            autocomplete=N,
            typo_tolerance=L,  # fuzzy queries only
            custom_ranking=N,
            multilingual=N,
            batch_operations=N,
        ),
        performance_limits=PerformanceLimits(
            max_batch_size=1000,
            max_query_length=32768,
            max_facets=100,
            max_filters=256,
            max_results_per_page=10000,
            default_timeout_seconds=30,
            rate_limit_rps=None,  # cluster-dependent
        ),
        provider_specific={
            "scroll_api": N,
            "percolator": N,
            "machine_learning": C,
            "security": C,
        },
    )


def opensearch_capability_matrix() -> CapabilityMatrix:
    """OpenSearch shares Elasticsearch's surface but ships k-NN natively."""
    matrix = elasticsearch_capability_matrix()
    return matrix.model_copy(
        update={
            "provider_name": "opensearch",
            "advanced_features": matrix.advanced_features.model_copy(update={"vector_search": N}),
            "provider_specific": {
                **matrix.provider_specific,
                "neural_search": N,
                "anomaly_detection": N,
            },
        }
    )


def typesense_capability_matrix() -> CapabilityMatrix:
    return CapabilityMatrix(
        provider_name="typesense",
        core_capabilities=CoreCapabilities(
            full_text_search=N,
            keyword_search=N,
            index_management=N,
            document_operations=N,
            schema_management=N,
            filtering=N,
            pagination=N,
        ),
        advanced_features=AdvancedFeatures(
            faceted_search=N,
            highlighting=N,
            vector_search=N,
            geo_search=N,
            streaming_search=U,  # no scroll-equivalent API
            autocomplete=N,
            typo_tolerance=N,
            custom_ranking=N,
            multilingual=L,
            batch_operations=L,  # import endpoint is sequential
        ),
        performance_limits=PerformanceLimits(
            max_batch_size=100,
            max_query_length=2048,
            max_facets=50,
            max_filters=100,
            max_results_per_page=250,
            default_timeout_seconds=30,
        ),
        provider_specific={
            "instant_search": N,
            "collection_aliases": N,
            "curation": N,
        },
    )


def meilisearch_capability_matrix() -> CapabilityMatrix:
    return CapabilityMatrix(
        provider_name="meilisearch",
        core_capabilities=CoreCapabilities(
            full_text_search=N,
            keyword_search=N,
            index_management=N,
            document_operations=N,
            schema_management=N,
            filtering=N,
            pagination=N,
        ),
        advanced_features=AdvancedFeatures(
            faceted_search=N,
            highlighting=N,
            vector_search=L,  # experimental
            geo_search=N,
            streaming_search=U,
            autocomplete=N,
            typo_tolerance=N,
            custom_ranking=N,
            multilingual=N,
            batch_operations=N,
        ),
        performance_limits=PerformanceLimits(
            max_batch_size=1000,
            max_query_length=4096,
            max_facets=100,
            max_filters=200,
            max_results_per_page=1000,
            default_timeout_seconds=30,
        ),
        provider_specific={
            "stop_words": N,
            "synonyms": N,
            "ranking_rules": N,
            "distinct": N,
        },
    )


def algolia_capability_matrix() -> CapabilityMatrix:
    return CapabilityMatrix(
        provider_name="algolia",
        core_capabilities=CoreCapabilities(
            full_text_search=N,
            keyword_search=N,
            index_management=N,
            document_operations=N,
            schema_management=N,
            filtering=N,
            pagination=N,
        ),
        advanced_features=AdvancedFeatures(
            faceted_search=N,
            highlighting=N,
            vector_search=L,  # through the Recommend API
            geo_search=N,
            streaming_search=U,
            autocomplete=N,
            typo_tolerance=N,
            custom_ranking=N,
            multilingual=N,
            batch_operations=N,
        ),
        performance_limits=PerformanceLimits(
            max_batch_size=1000,
            max_query_length=512,
            max_facets=100,
            max_filters=100,
            max_results_per_page=1000,
            default_timeout_seconds=30,
            rate_limit_rps=1000,  # plan-dependent estimate
        ),
        provider_specific={
            "analytics": N,
            "ab_testing": N,
            "personalization": N,
            "recommend": N,
        },
    )


_MATRICES: dict[str, Callable[[], CapabilityMatrix]] = {
    "algolia": algolia_capability_matrix,
    "elasticsearch": elasticsearch_capability_matrix,
    "opensearch": opensearch_capability_matrix,
    "typesense": typesense_capability_matrix,
    "meilisearch": meilisearch_capability_matrix,
}

_ALIASES = {"elastic": "elasticsearch"}


def resolve_provider(provider: str) -> str:
    """Canonical identifier for ``provider`` (case-insensitive, aliases resolved).

    Raises:
        InvalidQueryError: If the provider is not one of the known five.
    """
    name = provider.lower()
    name = _ALIASES.get(name, name)
    if name not in _MATRICES:
        raise InvalidQueryError(f"Unknown provider: {provider}. Available providers: {known_providers()}")
    return name


def get_capability_matrix(provider: str) -> CapabilityMatrix:
    """Return the capability matrix for a provider identifier.

    Raises:
        InvalidQueryError: If the provider is not one of the known five.
    """
    return _MATRICES[resolve_provider(provider)]()


def known_providers() -> list[str]:
    return list(_MATRICES)
