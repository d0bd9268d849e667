"""Capability checker — Advisory validation of a query against a provider.

``CapabilityChecker.check_query_support`` never raises. Everything it finds
is reported as a ``CompatibilityIssue`` in the returned
``QuerySupportResult``; deciding whether to proceed is up to the caller.

Only the faceting and highlighting checks can set ``requires_fallback``.
A query that merely exceeds a performance limit is reported as not fully
supported but not requiring a fallback.
"""

from __future__ import annotations

import logging
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from unisearch.capabilities.matrix import CapabilityMatrix
from unisearch.capabilities.support import DegradationStrategy, FeatureSupport
from unisearch.models.query import SearchQuery

logger = logging.getLogger(__name__)


class UnsupportedFeature(BaseModel):
    kind: Literal["unsupported_feature"] = "unsupported_feature"
    feature: str
    fallback: str


class LimitedSupport(BaseModel):
    kind: Literal["limited_support"] = "limited_support"
    feature: str
    limitation: str


class RequiresFallback(BaseModel):
    kind: Literal["requires_fallback"] = "requires_fallback"
    feature: str
    method: str


class ConditionalSupport(BaseModel):
    kind: Literal["conditional_support"] = "conditional_support"
    feature: str
    condition: str


class PerformanceLimit(BaseModel):
    kind: Literal["performance_limit"] = "performance_limit"
    parameter: str
    requested: str
    limit: str


CompatibilityIssue = Annotated[
    UnsupportedFeature | LimitedSupport | RequiresFallback | ConditionalSupport | PerformanceLimit,
    Field(discriminator="kind"),
]


class QuerySupportResult(BaseModel):
    """Outcome of checking one query against one provider."""

    is_fully_supported: bool = Field(description="True when no issue was found")
    requires_fallback: bool = Field(description="True when facets or highlights must be emulated")
    issues: list[CompatibilityIssue] = Field(default_factory=list, description="Issues in check order")


class _FeatureMessages(BaseModel):
    feature: str
    limitation: str
    method: str
    condition: str


_FACET_MESSAGES = _FeatureMessages(
    feature="faceted_search",
    limitation="May have performance or accuracy limitations",
    method="Client-side post-processing",
    condition="Depends on index configuration",
)

_HIGHLIGHT_MESSAGES = _FeatureMessages(
    feature="highlighting",
    limitation="May not support all highlight options",
    method="Client-side text processing",
    condition="Depends on field configuration",
)


class CapabilityChecker:
    """Validates queries against a capability matrix and degradation strategy.

    Args:
        matrix: The provider's capability matrix.
        strategy: The degradation strategy in force for the provider.
    """

    def __init__(self, matrix: CapabilityMatrix, strategy: DegradationStrategy) -> None:
        self._matrix = matrix
        self._strategy = strategy

    @property
    def matrix(self) -> CapabilityMatrix:
        return self._matrix

    @property
    def strategy(self) -> DegradationStrategy:
        return self._strategy

    def check_query_support(self, query: SearchQuery) -> QuerySupportResult:
        """Check which parts of ``query`` the provider can serve natively.

        Args:
            query: The query about to be dispatched.

        Returns:
            A fresh ``QuerySupportResult``; issues are ordered facets,
            highlighting, page size, query length, filter count.
        """
        issues: list[CompatibilityIssue] = []
        requires_fallback = False

        if query.facets:
            issue = self._check_feature(
                self._matrix.advanced_features.faceted_search,
                _FACET_MESSAGES,
                self._strategy.facet_fallback.value,
            )
            if issue is not None:
                issues.append(issue)
                requires_fallback |= isinstance(issue, UnsupportedFeature | RequiresFallback)

        if query.highlight is not None:
            issue = self._check_feature(
                self._matrix.advanced_features.highlighting,
                _HIGHLIGHT_MESSAGES,
                self._strategy.highlight_fallback.value,
            )
            if issue is not None:
                issues.append(issue)
                requires_fallback |= isinstance(issue, UnsupportedFeature | RequiresFallback)

        limits = self._matrix.performance_limits

        if (
            query.per_page is not None
            and limits.max_results_per_page is not None
            and query.per_page > limits.max_results_per_page
        ):
            issues.append(
                PerformanceLimit(
                    parameter="per_page",
                    requested=str(query.per_page),
                    limit=str(limits.max_results_per_page),
                )
            )

        if query.q is not None and limits.max_query_length is not None and len(query.q) > limits.max_query_length:
            issues.append(
                PerformanceLimit(
                    parameter="query_length",
                    requested=str(len(query.q)),
                    limit=str(limits.max_query_length),
                )
            )

        if query.filters and limits.max_filters is not None and len(query.filters) > limits.max_filters:
            issues.append(
                PerformanceLimit(
                    parameter="filter_count",
                    requested=str(len(query.filters)),
                    limit=str(limits.max_filters),
                )
            )

        logger.debug(
            "Checked query against %s: %d issue(s), requires_fallback=%s",
            self._matrix.provider_name,
            len(issues),
            requires_fallback,
        )
        return QuerySupportResult(
            is_fully_supported=not issues,
            requires_fallback=requires_fallback,
            issues=issues,
        )

    @staticmethod
    def _check_feature(
        support: FeatureSupport,
        messages: _FeatureMessages,
        fallback: str,
    ) -> CompatibilityIssue | None:
        if support is FeatureSupport.NATIVE:
            return None
        if support is FeatureSupport.LIMITED:
            return LimitedSupport(feature=messages.feature, limitation=messages.limitation)
        if support is FeatureSupport.UNSUPPORTED:
            return UnsupportedFeature(feature=messages.feature, fallback=fallback)
        if support is FeatureSupport.EMULATED:
            return RequiresFallback(feature=messages.feature, method=messages.method)
        return ConditionalSupport(feature=messages.feature, condition=messages.condition)
