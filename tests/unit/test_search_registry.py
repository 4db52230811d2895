"""Unit tests for named analyzer presets."""

import pytest

from search_analysis.analysis import registry
from search_analysis.analysis.analyzer import Analyzer
from search_analysis.analysis.registry import available_analyzers, get_analyzer, is_index_only
from search_analysis.analysis.stemming import UnknownLanguageError
from search_analysis.config import Settings


@pytest.fixture
def fresh_registry(monkeypatch):
    """Provide a temporary preset registry so tests stay isolated."""

    monkeypatch.setattr(registry, "_ANALYZER_PRESETS", registry._ANALYZER_PRESETS.copy())
    return registry._ANALYZER_PRESETS


class TestPresets:
    """Each preset wires the expected filter chain."""

    def test_available_names(self):
        assert available_analyzers() == ["autocomplete", "default", "english", "fuzzy", "standard"]

    def test_none_selects_default(self):
        analyzer = get_analyzer(None)

        assert isinstance(analyzer, Analyzer)
        assert analyzer.name == "default"
        assert [t.term for t in analyzer("Hello World")] == ["Hello", "World"]

    def test_lookup_is_case_insensitive(self):
        assert get_analyzer("STANDARD").name == "standard"

    def test_standard_folds_case_and_accents(self):
        tokens = list(get_analyzer("standard")("Crème Brûlée"))

        assert [t.as_tuple() for t in tokens] == [("creme", 0, 0), ("brulee", 1, 6)]

    def test_english_removes_stop_words_and_stems(self):
        tokens = list(get_analyzer("english")("Running with the cats"))

        assert [t.as_tuple() for t in tokens] == [("run", 0, 0), ("cat", 3, 17)]

    def test_fuzzy_emits_trigrams(self):
        assert [t.term for t in get_analyzer("fuzzy")("Vault")] == ["vau", "aul", "ult"]

    def test_autocomplete_emits_prefixes(self):
        assert [t.term for t in get_analyzer("autocomplete")("Cat")] == ["c", "ca", "cat"]

    def test_each_call_builds_a_new_analyzer(self):
        assert get_analyzer("english") is not get_analyzer("english")


class TestQueryRestrictions:
    """Index-only presets cannot be used to analyse queries."""

    def test_autocomplete_is_index_only(self):
        assert is_index_only("autocomplete")
        assert not is_index_only("english")
        assert not is_index_only("missing")

    def test_index_only_preset_refused_for_queries(self):
        with pytest.raises(ValueError, match="index-only"):
            get_analyzer("autocomplete", for_query=True)

    def test_regular_preset_allowed_for_queries(self):
        assert get_analyzer("english", for_query=True).name == "english"

    def test_unknown_name_raises(self, fresh_registry):
        with pytest.raises(ValueError, match="Unknown analyzer"):
            get_analyzer("missing")


class TestPresetsFromSettings:
    """Presets honour the analysis settings."""

    def test_separator_pattern_applied(self):
        settings = Settings(separator_pattern=r"\|")

        tokens = list(get_analyzer("default", settings=settings)("a b|c"))

        assert [t.term for t in tokens] == ["a b", "c"]

    def test_ngram_sizes_applied(self):
        settings = Settings(ngram_min_size=2, ngram_max_size=3)

        assert [t.term for t in get_analyzer("fuzzy", settings=settings)("cat")] == ["ca", "cat", "at"]

    def test_stemmer_language_applied(self):
        settings = Settings(stemmer_language="klingon")

        with pytest.raises(UnknownLanguageError):
            list(get_analyzer("english", settings=settings)("words"))

    def test_eager_resolution_fails_when_building(self):
        settings = Settings(stemmer_language="klingon", eager_language_resolution=True)

        with pytest.raises(UnknownLanguageError):
            get_analyzer("english", settings=settings)
