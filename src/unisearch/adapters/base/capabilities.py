"""Provider capability contract.

Any provider wrapper can implement ``ProviderCapabilities`` to advertise
what its backend supports. ``validate_query_compatibility`` comes for free
once the matrix and strategy are available.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from unisearch.capabilities.checker import CapabilityChecker, QuerySupportResult
from unisearch.capabilities.matrix import CapabilityMatrix
from unisearch.capabilities.support import DegradationStrategy, FeatureSupport
from unisearch.models.query import SearchQuery


class ProviderCapabilities(ABC):
    """Abstract capability declaration for a search provider."""

    @abstractmethod
    def get_capability_matrix(self) -> CapabilityMatrix:
        """Return the provider's capability matrix."""

    @abstractmethod
    def get_degradation_strategy(self) -> DegradationStrategy:
        """Return the degradation strategy used for this provider."""

    def supports_feature(self, feature: str) -> FeatureSupport:
        """Support level for a feature name; unknown names are ``UNSUPPORTED``."""
        return self.get_capability_matrix().feature_support(feature)

    def validate_query_compatibility(self, query: SearchQuery) -> QuerySupportResult:
        checker = CapabilityChecker(self.get_capability_matrix(), self.get_degradation_strategy())
        return checker.check_query_support(query)
