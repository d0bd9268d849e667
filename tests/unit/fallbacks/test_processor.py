"""Tests for FallbackProcessor (client-side facets, highlighting, post-processing)."""

from __future__ import annotations

import json
import logging

import pytest

from unisearch.capabilities.support import (
    DegradationStrategy,
    FacetFallback,
    FeatureSupport,
    HighlightFallback,
)
from unisearch.exceptions import UnsupportedFeatureError
from unisearch.fallbacks.processor import FallbackProcessor
from unisearch.models.query import HighlightConfig, SearchQuery
from unisearch.models.result import SearchHit, SearchResults

# ── Client-side facets ───────────────────────────────────────────────────────


class TestClientSideFacets:
    @pytest.fixture
    def processor(self, strategy: DegradationStrategy) -> FallbackProcessor:
        return FallbackProcessor(strategy)

    def test_counts_categories(self, processor: FallbackProcessor, product_hits: list[SearchHit]) -> None:
        facets = processor.compute_client_side_facets(product_hits, ["category"])
        assert facets == {"category": {"books": 2, "electronics": 1}}

    def test_array_values_count_per_element(
        self, processor: FallbackProcessor, product_hits: list[SearchHit]
    ) -> None:
        facets = processor.compute_client_side_facets(product_hits, ["tags"])
        assert facets == {"tags": {"paper": 1, "fiction": 2}}

    def test_numbers_and_bools_as_strings(self, processor: FallbackProcessor, product_hits: list[SearchHit]) -> None:
        facets = processor.compute_client_side_facets(product_hits, ["price", "in_stock"])
        assert facets == {"price": {"10": 1, "15": 1, "100": 1}, "in_stock": {"true": 1}}

    def test_absent_field_is_omitted(self, processor: FallbackProcessor, product_hits: list[SearchHit]) -> None:
        facets = processor.compute_client_side_facets(product_hits, ["category", "brand"])
        assert "brand" not in facets
        assert "category" in facets

    def test_structured_values_use_compact_json(self, processor: FallbackProcessor) -> None:
        hits = [
            SearchHit(id="1", content=json.dumps({"meta": {"k": "v"}, "tags": [["a", "b"]]})),
            SearchHit(id="2", content=json.dumps({"meta": {"city": "Z\u00fcrich"}})),
        ]
        facets = processor.compute_client_side_facets(hits, ["meta", "tags"])
        assert facets == {
            "meta": {'{"k":"v"}': 1, '{"city":"Z\u00fcrich"}': 1},
            "tags": {'["a","b"]': 1},
        }

    def test_unparseable_content_skipped(self, processor: FallbackProcessor) -> None:
        hits = [
            SearchHit(id="1", content="not json"),
            SearchHit(id="2", content=None),
            SearchHit(id="3", content='["a", "list"]'),
            SearchHit(id="4", content='{"category": "toys"}'),
        ]
        assert processor.compute_client_side_facets(hits, ["category"]) == {"category": {"toys": 1}}


class TestFacetFallback:
    def test_client_side_sets_facets(
        self,
        product_results: SearchResults,
        facet_query: SearchQuery,
        unsupported_features: dict[str, FeatureSupport],
    ) -> None:
        FallbackProcessor(DegradationStrategy()).process_search_results(
            product_results, facet_query, unsupported_features
        )
        assert json.loads(product_results.facets or "") == {"category": {"books": 2, "electronics": 1}}

    def test_emulated_triggers_fallback(self, product_results: SearchResults, facet_query: SearchQuery) -> None:
        FallbackProcessor(DegradationStrategy()).process_search_results(
            product_results, facet_query, {"faceted_search": FeatureSupport.EMULATED}
        )
        assert product_results.facets is not None

    def test_missing_feature_key_treated_as_unsupported(
        self, product_results: SearchResults, facet_query: SearchQuery
    ) -> None:
        FallbackProcessor(DegradationStrategy()).process_search_results(product_results, facet_query, {})
        assert product_results.facets is not None

    @pytest.mark.parametrize("level", [FeatureSupport.NATIVE, FeatureSupport.LIMITED, FeatureSupport.CONDITIONAL])
    def test_available_support_left_alone(
        self, product_results: SearchResults, facet_query: SearchQuery, level: FeatureSupport
    ) -> None:
        FallbackProcessor(DegradationStrategy()).process_search_results(
            product_results, facet_query, {"faceted_search": level}
        )
        assert product_results.facets is None

    @pytest.mark.parametrize("policy", [FacetFallback.EMPTY, FacetFallback.SEPARATE_QUERIES])
    def test_empty_policies(
        self,
        product_results: SearchResults,
        facet_query: SearchQuery,
        unsupported_features: dict[str, FeatureSupport],
        policy: FacetFallback,
    ) -> None:
        processor = FallbackProcessor(DegradationStrategy(facet_fallback=policy))
        processor.process_search_results(product_results, facet_query, unsupported_features)
        assert product_results.facets == "{}"

    def test_error_policy_raises(
        self,
        product_results: SearchResults,
        facet_query: SearchQuery,
        unsupported_features: dict[str, FeatureSupport],
    ) -> None:
        processor = FallbackProcessor(DegradationStrategy(facet_fallback=FacetFallback.ERROR))
        with pytest.raises(UnsupportedFeatureError) as exc_info:
            processor.process_search_results(product_results, facet_query, unsupported_features)
        assert exc_info.value.feature == "faceted_search"

    def test_strict_mode_raises(
        self,
        product_results: SearchResults,
        facet_query: SearchQuery,
        unsupported_features: dict[str, FeatureSupport],
    ) -> None:
        processor = FallbackProcessor(DegradationStrategy(strict_mode=True))
        with pytest.raises(UnsupportedFeatureError):
            processor.process_search_results(product_results, facet_query, unsupported_features)
        assert product_results.facets is None


# ── Client-side highlighting ─────────────────────────────────────────────────


class TestExtractSearchTerms:
    def test_cleans_and_filters_tokens(self) -> None:
        query = SearchQuery(q="Hello, world! a an the C++ rust-lang")
        assert FallbackProcessor.extract_search_terms(query) == ["hello", "world", "the", "rustlang"]

    def test_no_query_text(self) -> None:
        assert FallbackProcessor.extract_search_terms(SearchQuery()) == []


class TestHighlightText:
    def test_highlights_both_terms(self) -> None:
        snippets = FallbackProcessor.highlight_text(
            "Rust is a great programming language for systems programming",
            ["rust", "programming"],
            "<mark>",
            "</mark>",
            100,
        )
        assert snippets
        joined = " ".join(snippets)
        assert "<mark>Rust</mark>" in joined
        assert "<mark>programming</mark>" in joined

    def test_whole_word_case_insensitive(self) -> None:
        snippets = FallbackProcessor.highlight_text("Trust rust RUST", ["rust"], "[", "]")
        assert snippets == ["Trust [rust] [RUST]"]

    def test_max_length_clips_snippet(self) -> None:
        snippets = FallbackProcessor.highlight_text("The quick brown fox", ["quick"], "[", "]", 9)
        assert snippets == ["The [quick]"]

    def test_context_window(self) -> None:
        text = "a" * 80 + " needle " + "b" * 80
        (snippet,) = FallbackProcessor.highlight_text(text, ["needle"], "[", "]")
        assert snippet == "a" * 49 + " [needle] " + "b" * 49

    def test_no_match(self) -> None:
        assert FallbackProcessor.highlight_text("nothing here", ["absent"], "[", "]") == []

    def test_dedup_and_cap_at_three(self) -> None:
        filler = "." * 120
        text = filler.join(["alpha", "bravo", "charlie", "delta"])
        snippets = FallbackProcessor.highlight_text(text, ["alpha", "bravo", "charlie", "delta"], "[", "]")
        assert len(snippets) == 3
        assert snippets == sorted(snippets)
        assert not any("alpha" in s for s in snippets)

    def test_each_snippet_tags_only_its_own_term(self) -> None:
        snippets = FallbackProcessor.highlight_text("short rust text", ["short", "rust", "text"], "[", "]")
        assert snippets == ["[short] rust text", "short [rust] text", "short rust [text]"]

    def test_identical_snippets_collapse(self) -> None:
        snippets = FallbackProcessor.highlight_text("rust Rust", ["rust", "rust"], "[", "]")
        assert snippets == ["[rust] [Rust]"]

    def test_window_uses_offsets_of_original_text(self) -> None:
        # "\u0130".lower() is two code points long.
        text = "\u0130" * 60 + " rust tail"
        assert FallbackProcessor.highlight_text(text, ["rust"], "[", "]") == ["\u0130" * 49 + " [rust] tail"]


class TestHighlightFallback:
    def test_client_side_sets_highlights(
        self,
        product_results: SearchResults,
        highlight_query: SearchQuery,
        unsupported_features: dict[str, FeatureSupport],
    ) -> None:
        FallbackProcessor(DegradationStrategy()).process_search_results(
            product_results, highlight_query, unsupported_features
        )
        first, second, third = product_results.hits

        highlights = json.loads(first.highlights or "")
        assert highlights["description"] == [
            "<mark>Rust</mark> is a great programming language for systems progr",
            "Rust is a great <mark>programming</mark> language for systems <mark>programming</mark>",
        ]

        assert second.highlights is None
        assert json.loads(third.highlights or "") == {
            "description": ["A laptop built for <mark>programming</mark>"]
        }

    def test_default_tags(self, unsupported_features: dict[str, FeatureSupport]) -> None:
        results = SearchResults(hits=[SearchHit(id="1", content='{"title": "Learning Python"}')])
        query = SearchQuery(q="python", highlight=HighlightConfig(fields=["title"]))
        FallbackProcessor(DegradationStrategy()).process_search_results(results, query, unsupported_features)
        assert json.loads(results.hits[0].highlights or "") == {"title": ["Learning <mark>Python</mark>"]}

    def test_non_string_field_ignored(self, unsupported_features: dict[str, FeatureSupport]) -> None:
        results = SearchResults(hits=[SearchHit(id="1", content='{"title": 12345}')])
        query = SearchQuery(q="12345", highlight=HighlightConfig(fields=["title"]))
        FallbackProcessor(DegradationStrategy()).process_search_results(results, query, unsupported_features)
        assert results.hits[0].highlights is None

    def test_existing_highlight_kept_when_nothing_matches(
        self, unsupported_features: dict[str, FeatureSupport]
    ) -> None:
        native = '{"title": ["<em>kept</em>"]}'
        results = SearchResults(hits=[SearchHit(id="1", content='{"title": "other"}', highlights=native)])
        query = SearchQuery(q="missing", highlight=HighlightConfig(fields=["title"]))
        FallbackProcessor(DegradationStrategy()).process_search_results(results, query, unsupported_features)
        assert results.hits[0].highlights == native

    def test_none_policy_clears_highlights(self, unsupported_features: dict[str, FeatureSupport]) -> None:
        results = SearchResults(
            hits=[SearchHit(id="1", highlights='{"a": ["b"]}'), SearchHit(id="2", highlights='{"c": ["d"]}')]
        )
        query = SearchQuery(q="test", highlight=HighlightConfig(fields=["a"]))
        processor = FallbackProcessor(DegradationStrategy(highlight_fallback=HighlightFallback.NONE))
        processor.process_search_results(results, query, unsupported_features)
        assert all(hit.highlights is None for hit in results.hits)

    def test_error_policy_raises(
        self,
        product_results: SearchResults,
        highlight_query: SearchQuery,
        unsupported_features: dict[str, FeatureSupport],
    ) -> None:
        processor = FallbackProcessor(DegradationStrategy(highlight_fallback=HighlightFallback.ERROR))
        with pytest.raises(UnsupportedFeatureError, match="highlighting"):
            processor.process_search_results(product_results, highlight_query, unsupported_features)

    def test_native_highlighting_untouched(
        self,
        product_results: SearchResults,
        highlight_query: SearchQuery,
        native_features: dict[str, FeatureSupport],
    ) -> None:
        FallbackProcessor(DegradationStrategy()).process_search_results(
            product_results, highlight_query, native_features
        )
        assert all(hit.highlights is None for hit in product_results.hits)


# ── Post-processing and whole-pass behavior ──────────────────────────────────


class TestPostProcessing:
    def test_defaults_total_and_took_ms(self, product_results: SearchResults) -> None:
        FallbackProcessor(DegradationStrategy()).process_search_results(product_results, SearchQuery(), {})
        assert product_results.total == 3
        assert product_results.took_ms == 0

    def test_keeps_provider_values(self, product_hits: list[SearchHit]) -> None:
        results = SearchResults(hits=product_hits, total=250, took_ms=12)
        FallbackProcessor(DegradationStrategy()).process_search_results(results, SearchQuery(), {})
        assert results.total == 250
        assert results.took_ms == 12

    def test_idempotent_when_nothing_degraded(
        self,
        product_results: SearchResults,
        native_features: dict[str, FeatureSupport],
    ) -> None:
        query = SearchQuery(
            q="rust",
            facets=["category"],
            highlight=HighlightConfig(fields=["description"]),
        )
        processor = FallbackProcessor(DegradationStrategy())
        processor.process_search_results(product_results, query, native_features)
        snapshot = product_results.model_copy(deep=True)
        processor.process_search_results(product_results, query, native_features)
        assert product_results == snapshot
        processor.process_search_results(product_results, query, native_features)
        assert product_results == snapshot

    def test_partial_mutation_is_kept_on_failure(
        self,
        product_results: SearchResults,
        unsupported_features: dict[str, FeatureSupport],
    ) -> None:
        query = SearchQuery(q="rust", facets=["category"], highlight=HighlightConfig(fields=["description"]))
        processor = FallbackProcessor(DegradationStrategy(highlight_fallback=HighlightFallback.ERROR))
        with pytest.raises(UnsupportedFeatureError):
            processor.process_search_results(product_results, query, unsupported_features)
        assert product_results.facets is not None
        assert product_results.total is None


class TestDegradationLogging:
    def test_warning_logged(
        self,
        caplog: pytest.LogCaptureFixture,
        product_results: SearchResults,
        facet_query: SearchQuery,
        unsupported_features: dict[str, FeatureSupport],
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="unisearch"):
            FallbackProcessor(DegradationStrategy()).process_search_results(
                product_results, facet_query, unsupported_features
            )
        assert "computing facets client-side" in caplog.text

    def test_warning_suppressed(
        self,
        caplog: pytest.LogCaptureFixture,
        product_results: SearchResults,
        facet_query: SearchQuery,
        unsupported_features: dict[str, FeatureSupport],
    ) -> None:
        processor = FallbackProcessor(DegradationStrategy(log_unsupported_warnings=False))
        with caplog.at_level(logging.WARNING, logger="unisearch"):
            processor.process_search_results(product_results, facet_query, unsupported_features)
        assert caplog.records == []
        assert product_results.facets is not None
