"""Fallback processor — Client-side repair of degraded search results.

After a provider has answered, ``FallbackProcessor.process_search_results``
patches the holes left by features the provider could not serve:

  1. Facets: computed from the returned hits, emptied, or refused.
  2. Highlights: generated by simple term matching, cleared, or refused.
  3. Post-processing: ``total`` and ``took_ms`` are defaulted when absent.

The results object is mutated in place. If a later step fails, changes made
by earlier steps are kept; the processor is not transactional.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Mapping
from typing import Any

from unisearch.capabilities.support import (
    DegradationStrategy,
    FacetFallback,
    FeatureSupport,
    HighlightFallback,
)
from unisearch.exceptions import InternalError, UnsupportedFeatureError
from unisearch.models.query import HighlightConfig, SearchQuery
from unisearch.models.result import SearchHit, SearchResults

logger = logging.getLogger(__name__)

SNIPPET_CONTEXT_CHARS = 50
MAX_SNIPPETS_PER_FIELD = 3
MIN_TERM_LENGTH = 3
DEFAULT_PRE_TAG = "<mark>"
DEFAULT_POST_TAG = "</mark>"

_DEGRADED = (FeatureSupport.UNSUPPORTED, FeatureSupport.EMULATED)


class FallbackProcessor:
    """Applies a ``DegradationStrategy`` to provider results.

    Args:
        strategy: The degradation strategy to follow.
    """

    def __init__(self, strategy: DegradationStrategy) -> None:
        self._strategy = strategy

    @property
    def strategy(self) -> DegradationStrategy:
        return self._strategy

    def process_search_results(
        self,
        results: SearchResults,
        original_query: SearchQuery,
        supported_features: Mapping[str, FeatureSupport],
    ) -> None:
        """Fill in facets and highlights the provider did not supply.

        Args:
            results: Provider results; mutated in place.
            original_query: The query that produced ``results``.
            supported_features: Feature name to support level, typically
                ``CapabilityMatrix.feature_map()``. Missing features count as
                ``UNSUPPORTED``.

        Raises:
            UnsupportedFeatureError: When the strategy forbids degrading a
                requested feature.
            InternalError: When facets or highlights cannot be serialised.
        """
        if original_query.facets:
            support = supported_features.get("faceted_search", FeatureSupport.UNSUPPORTED)
            if support in _DEGRADED:
                self._apply_facet_fallback(results, original_query)

        if original_query.highlight is not None:
            support = supported_features.get("highlighting", FeatureSupport.UNSUPPORTED)
            if support in _DEGRADED:
                self._apply_highlight_fallback(results, original_query)

        self._apply_post_processing(results)

    # ── Facets ───────────────────────────────────────────────────────────

    def _apply_facet_fallback(self, results: SearchResults, query: SearchQuery) -> None:
        policy = self._strategy.facet_fallback
        if self._strategy.strict_mode or policy is FacetFallback.ERROR:
            raise UnsupportedFeatureError("faceted_search")

        if policy is FacetFallback.CLIENT_SIDE:
            self._warn("Faceted search not supported by provider - computing facets client-side")
            facets = self.compute_client_side_facets(results.hits, query.facets)
            results.facets = _dumps(facets)
        elif policy is FacetFallback.SEPARATE_QUERIES:
            self._warn(
                "Faceted search not supported by provider - separate aggregation queries "
                "are not implemented, returning empty facets"
            )
            results.facets = "{}"
        else:
            self._warn("Faceted search not supported by provider - returning empty facets")
            results.facets = "{}"

    def compute_client_side_facets(
        self,
        hits: list[SearchHit],
        facet_fields: list[str],
    ) -> dict[str, dict[str, int]]:
        """Count distinct values of each facet field across ``hits``.

        Array values count once per element. Non-string values are counted
        under their JSON representation (``10``, ``true``, ``null``). Hits
        whose content is missing or not a JSON object are skipped, and fields
        seen in no hit are left out of the result.

        Args:
            hits: Hits whose ``content`` is a JSON object string.
            facet_fields: Field names to count.

        Returns:
            Mapping of field name to ``{value: count}``.
        """
        documents = [doc for doc in (_parse_document(hit) for hit in hits) if doc is not None]
        facets: dict[str, dict[str, int]] = {}

        for field_name in facet_fields:
            counts: dict[str, int] = {}
            for doc in documents:
                if field_name not in doc:
                    continue
                value = doc[field_name]
                values = value if isinstance(value, list) else [value]
                for item in values:
                    key = _facet_value(item)
                    counts[key] = counts.get(key, 0) + 1
            if counts:
                facets[field_name] = counts

        logger.debug("Computed client-side facets for %d fields", len(facets))
        return facets

    # ── Highlighting ─────────────────────────────────────────────────────

    def _apply_highlight_fallback(self, results: SearchResults, query: SearchQuery) -> None:
        policy = self._strategy.highlight_fallback
        if self._strategy.strict_mode or policy is HighlightFallback.ERROR:
            raise UnsupportedFeatureError("highlighting")

        if policy is HighlightFallback.NONE:
            self._warn("Highlighting not supported by provider - removing highlights")
            for hit in results.hits:
                hit.highlights = None
            return

        self._warn("Highlighting not supported by provider - applying client-side highlighting")
        if query.highlight is not None:
            self._apply_client_side_highlighting(results.hits, query, query.highlight)

    def _apply_client_side_highlighting(
        self,
        hits: list[SearchHit],
        query: SearchQuery,
        config: HighlightConfig,
    ) -> None:
        terms = self.extract_search_terms(query)
        pre_tag = config.pre_tag if config.pre_tag is not None else DEFAULT_PRE_TAG
        post_tag = config.post_tag if config.post_tag is not None else DEFAULT_POST_TAG

        for hit in hits:
            doc = _parse_document(hit)
            if doc is None:
                continue
            highlights: dict[str, list[str]] = {}
            for field_name in config.fields:
                text = doc.get(field_name)
                if not isinstance(text, str):
                    continue
                snippets = self.highlight_text(text, terms, pre_tag, post_tag, config.max_length)
                if snippets:
                    highlights[field_name] = snippets
            # Leave existing highlights untouched when nothing matched.
            if highlights:
                hit.highlights = _dumps(highlights)

        logger.debug("Applied client-side highlighting to %d hits", len(hits))

    @staticmethod
    def extract_search_terms(query: SearchQuery) -> list[str]:
        """Split ``query.q`` into lower-cased alphanumeric terms of 3+ characters."""
        if not query.q:
            return []
        terms = []
        for token in query.q.split():
            term = "".join(ch for ch in token if ch.isalnum()).lower()
            if len(term) >= MIN_TERM_LENGTH:
                terms.append(term)
        return terms

    @staticmethod
    def highlight_text(
        text: str,
        search_terms: list[str],
        pre_tag: str,
        post_tag: str,
        max_length: int | None = None,
    ) -> list[str]:
        """Build tagged snippets around the first occurrence of each term.

        Each snippet spans up to 50 characters either side of the match,
        capped at ``max_length`` characters when given. Every whole-word,
        case-insensitive occurrence of the term inside the snippet is wrapped
        in ``pre_tag``/``post_tag``.

        Returns:
            At most three distinct snippets, in sorted order.
        """
        snippets: set[str] = set()

        for term in search_terms:
            match = re.search(re.escape(term), text, re.IGNORECASE)
            if match is None:
                continue
            start = max(match.start() - SNIPPET_CONTEXT_CHARS, 0)
            end = match.end() + SNIPPET_CONTEXT_CHARS
            if max_length is not None:
                end = min(end, start + max_length)
            end = min(end, len(text))
            if start >= len(text):
                continue

            pattern = re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE)
            snippet = pattern.sub(lambda m: f"{pre_tag}{m.group(0)}{post_tag}", text[start:end])
            snippets.add(snippet)

        return sorted(snippets)[:MAX_SNIPPETS_PER_FIELD]

    # ── Post-processing ──────────────────────────────────────────────────

    @staticmethod
    def _apply_post_processing(results: SearchResults) -> None:
        if results.total is None:
            results.total = len(results.hits)
        if results.took_ms is None:
            # 0 marks results that were not timed by a provider.
            results.took_ms = 0

    def _warn(self, message: str) -> None:
        if self._strategy.log_unsupported_warnings:
            logger.warning(message)


def _parse_document(hit: SearchHit) -> dict[str, Any] | None:
    if not hit.content:
        return None
    try:
        doc = json.loads(hit.content)
    except json.JSONDecodeError:
        logger.debug("Skipping hit %s: content is not valid JSON", hit.id)
        return None
    return doc if isinstance(doc, dict) else None


def _facet_value(value: Any) -> str:
    if isinstance(value, str):
        return value
    return _compact_json(value)


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _dumps(value: Any) -> str:
    try:
        return _compact_json(value)
    except (TypeError, ValueError) as e:
        raise InternalError(str(e), original_error=e) from e
