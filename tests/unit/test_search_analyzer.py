"""Unit tests for analyzer composition and configuration."""

from pydantic import ValidationError
from prometheus_client import REGISTRY
import pytest

from search_analysis.analysis.analyzer import Analyzer, AnalyzerOptions, build_analyzer, configure_analyzer
from search_analysis.analysis.filters import (
    en_stop_words_filter,
    lowercase_filter,
    min_length_filter,
    ngram_filter,
    prefix_filter,
    stemming_filter,
    unaccent_filter,
)
from search_analysis.analysis.stemming import UnknownLanguageError
from search_analysis.analysis.tokenizers import RegexTokenizer
from search_analysis.analysis.tokens import Token


def _tuples(tokens):
    return [t.as_tuple() for t in tokens]


class TestAnalyzerComposition:
    """Filters run as a flat-map chain in configured order."""

    def test_no_filters_returns_tokenizer_output(self):
        analyzer = build_analyzer(RegexTokenizer(r"\s+"))

        assert _tuples(analyzer.analyze("the quick fox")) == [("the", 0, 0), ("quick", 1, 4), ("fox", 2, 10)]

    def test_default_configuration_uses_default_tokenizer(self):
        analyzer = configure_analyzer()

        assert [t.term for t in analyzer("Hello, World")] == ["Hello", "World"]

    def test_rejected_tokens_keep_original_positions(self):
        analyzer = build_analyzer(RegexTokenizer(r"\s+"), [lowercase_filter, en_stop_words_filter])

        assert _tuples(analyzer("The quick fox")) == [("quick", 1, 4), ("fox", 2, 10)]

    def test_expanded_tokens_are_contiguous_in_source_order(self):
        analyzer = build_analyzer(RegexTokenizer(r"\s+"), [prefix_filter])

        assert _tuples(analyzer("ab cd")) == [
            ("a", 0, 0),
            ("ab", 0, 0),
            ("c", 1, 3),
            ("cd", 1, 3),
        ]

    def test_expansion_then_rejection(self):
        analyzer = build_analyzer(RegexTokenizer(r"\s+"), [ngram_filter(1, 2), min_length_filter(2)])

        assert [t.term for t in analyzer("abc")] == ["ab", "bc"]

    def test_filter_order_matters(self):
        tokenizer = RegexTokenizer(r"\s+")
        lower_then_stop = build_analyzer(tokenizer, [lowercase_filter, en_stop_words_filter])
        stop_then_lower = build_analyzer(tokenizer, [en_stop_words_filter, lowercase_filter])

        assert [t.term for t in lower_then_stop("The fox")] == ["fox"]
        assert [t.term for t in stop_then_lower("The fox")] == ["the", "fox"]

    def test_plain_functions_work_as_filters(self):
        def duplicate(token):
            return [token, token.with_term(token.term.upper())]

        analyzer = build_analyzer(RegexTokenizer(r"\s+"), [duplicate])

        assert _tuples(analyzer("a b")) == [("a", 0, 0), ("A", 0, 0), ("b", 1, 2), ("B", 1, 2)]

    def test_full_english_chain(self):
        analyzer = build_analyzer(
            RegexTokenizer(r"\s+"),
            [lowercase_filter, unaccent_filter, en_stop_words_filter, stemming_filter("english")],
        )

        assert _tuples(analyzer("The Quick Foxes jumped")) == [
            ("quick", 1, 4),
            ("fox", 2, 10),
            ("jump", 3, 16),
        ]

    def test_same_text_yields_same_tokens(self):
        analyzer = build_analyzer(RegexTokenizer(r"\s+"), [lowercase_filter, ngram_filter(2, 3)])

        assert list(analyzer("Café Society")) == list(analyzer("Café Society"))

    def test_empty_text_yields_empty_stream(self):
        analyzer = build_analyzer(RegexTokenizer(r"\s+"), [ngram_filter(2), prefix_filter])

        assert list(analyzer("")) == []


class TestAnalyzerLaziness:
    """Streams are lazy and fail only when consumed."""

    def test_unknown_language_surfaces_during_consumption(self):
        analyzer = build_analyzer(RegexTokenizer(r"\s+"), [stemming_filter("klingon")])

        stream = analyzer.analyze("qapla batlh")

        with pytest.raises(UnknownLanguageError):
            list(stream)

    def test_unknown_language_not_raised_without_tokens(self):
        analyzer = build_analyzer(RegexTokenizer(r"\s+"), [stemming_filter("klingon")])

        assert list(analyzer.analyze("")) == []

    def test_filters_run_only_as_tokens_are_pulled(self):
        seen = []

        def spy(token):
            seen.append(token.term)
            return [token]

        stream = build_analyzer(RegexTokenizer(r"\s+"), [spy])("a b c")

        assert next(stream) == Token("a", 0, 0)
        assert seen == ["a"]


class TestAnalyzerMetrics:
    """Analyzers record call, token and latency metrics per name."""

    def test_metrics_recorded_after_consumption(self):
        labels = {"analyzer": "metrics-check"}
        calls_before = REGISTRY.get_sample_value("analysis_calls_total", labels) or 0.0
        tokens_before = REGISTRY.get_sample_value("analysis_tokens_total", labels) or 0.0
        latency_before = REGISTRY.get_sample_value("analysis_latency_seconds_count", labels) or 0.0

        analyzer = Analyzer(RegexTokenizer(r"\s+"), [prefix_filter], name="metrics-check")
        tokens = list(analyzer("ab c"))

        assert len(tokens) == 3
        assert REGISTRY.get_sample_value("analysis_calls_total", labels) == calls_before + 1
        assert REGISTRY.get_sample_value("analysis_tokens_total", labels) == tokens_before + 3
        assert REGISTRY.get_sample_value("analysis_latency_seconds_count", labels) == latency_before + 1


class TestConfigureAnalyzer:
    """configure_analyzer validates options before building."""

    def test_accepts_options_mapping(self):
        analyzer = configure_analyzer(
            {"tokenizer": RegexTokenizer(r","), "token_filters": [lowercase_filter], "name": "csv"}
        )

        assert analyzer.name == "csv"
        assert [t.term for t in analyzer("A,B")] == ["a", "b"]

    def test_accepts_options_model(self):
        options = AnalyzerOptions(token_filters=[prefix_filter])

        analyzer = configure_analyzer(options)

        assert [t.term for t in analyzer("ab")] == ["a", "ab"]
        assert isinstance(analyzer.tokenizer, RegexTokenizer)

    def test_rejects_non_callable_filter(self):
        with pytest.raises(ValidationError):
            configure_analyzer({"token_filters": ["lowercase"]})

    def test_rejects_unknown_option(self):
        with pytest.raises(ValidationError):
            configure_analyzer({"tokenizer": RegexTokenizer(), "filters": []})

    def test_options_are_immutable(self):
        options = AnalyzerOptions()

        with pytest.raises(ValidationError):
            options.name = "changed"
