"""Feature support levels and degradation policies.

``FeatureSupport`` records how confidently a provider serves one feature.
``DegradationStrategy`` picks, per degradable feature family, what the
fallback layer does when a provider cannot serve that family natively.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class FeatureSupport(str, Enum):
    """Support level of one feature on one provider.

    - NATIVE: Fully supported by the provider's API.
    - LIMITED: Supported with workarounds or known limitations.
    - UNSUPPORTED: Not available at all.
    - CONDITIONAL: Depends on configuration or plugins of the live backend.
    - EMULATED: Provided by client-side emulation.
    """

    NATIVE = "native"
    LIMITED = "limited"
    UNSUPPORTED = "unsupported"
    CONDITIONAL = "conditional"
    EMULATED = "emulated"

    def is_available(self) -> bool:
        return self is not FeatureSupport.UNSUPPORTED

    def is_native(self) -> bool:
        return self is FeatureSupport.NATIVE

    def needs_fallback(self) -> bool:
        # CONDITIONAL depends on the live backend, not on a fallback.
        return self in (FeatureSupport.LIMITED, FeatureSupport.EMULATED)


class FacetFallback(str, Enum):
    EMPTY = "empty"
    CLIENT_SIDE = "client_side"
    # Declared for configuration compatibility; behaves like EMPTY.
    SEPARATE_QUERIES = "separate_queries"
    ERROR = "error"


class HighlightFallback(str, Enum):
    NONE = "none"
    CLIENT_SIDE = "client_side"
    ERROR = "error"


class StreamingFallbackPolicy(str, Enum):
    PAGINATION = "pagination"
    ERROR = "error"


class VectorSearchFallback(str, Enum):
    TEXT_SEARCH = "text_search"
    ERROR = "error"


class GeoSearchFallback(str, Enum):
    BOUNDING_BOX = "bounding_box"
    ERROR = "error"


class DegradationStrategy(BaseModel):
    """How unsupported features are handled for one provider wrapper.

    The defaults compute facets and highlights client-side, emulate
    streaming with pagination, fall back to text search for vectors and to
    bounding boxes for geo queries, log a warning for every degradation and
    never refuse a query outright.
    """

    model_config = {"frozen": True}

    facet_fallback: FacetFallback = Field(default=FacetFallback.CLIENT_SIDE)
    highlight_fallback: HighlightFallback = Field(default=HighlightFallback.CLIENT_SIDE)
    streaming_fallback: StreamingFallbackPolicy = Field(default=StreamingFallbackPolicy.PAGINATION)
    vector_search_fallback: VectorSearchFallback = Field(default=VectorSearchFallback.TEXT_SEARCH)
    geo_search_fallback: GeoSearchFallback = Field(default=GeoSearchFallback.BOUNDING_BOX)
    log_unsupported_warnings: bool = Field(default=True, description="Log a warning for each degradation")
    strict_mode: bool = Field(default=False, description="Raise instead of degrading unsupported features")
