"""Named analyzer presets.

A field must be analysed with the same preset at index time and at query
time. The one exception is ``autocomplete``: its prefix expansion is only
valid when indexing, so it refuses to be built for query analysis.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from search_analysis.analysis.analyzer import Analyzer
from search_analysis.analysis.filters import (
    NGramFilter,
    StemmingFilter,
    en_stop_words_filter,
    lowercase_filter,
    prefix_filter,
    unaccent_filter,
)
from search_analysis.analysis.tokenizers import DEFAULT_SEPARATOR_PATTERN, RegexTokenizer


if TYPE_CHECKING:
    from search_analysis.config import Settings


@dataclass(frozen=True)
class _Preset:
    build: Callable[[Settings | None], Analyzer]
    index_only: bool = False


def _tokenizer(settings: Settings | None) -> RegexTokenizer:
    return RegexTokenizer(settings.separator_pattern if settings else DEFAULT_SEPARATOR_PATTERN)


def _default(settings: Settings | None) -> Analyzer:
    return Analyzer(_tokenizer(settings), name="default")


def _standard(settings: Settings | None) -> Analyzer:
    return Analyzer(_tokenizer(settings), [lowercase_filter, unaccent_filter], name="standard")


def _english(settings: Settings | None) -> Analyzer:
    language = settings.stemmer_language if settings else "english"
    eager = settings.eager_language_resolution if settings else False
    filters = [lowercase_filter, unaccent_filter, en_stop_words_filter, StemmingFilter(language, eager=eager)]
    return Analyzer(_tokenizer(settings), filters, name="english")


def _fuzzy(settings: Settings | None) -> Analyzer:
    min_size = settings.ngram_min_size if settings else 3
    max_size = settings.ngram_max_size if settings else 3
    filters = [lowercase_filter, unaccent_filter, NGramFilter(min_size, max_size)]
    return Analyzer(_tokenizer(settings), filters, name="fuzzy")


def _autocomplete(settings: Settings | None) -> Analyzer:
    return Analyzer(_tokenizer(settings), [lowercase_filter, unaccent_filter, prefix_filter], name="autocomplete")


_ANALYZER_PRESETS: dict[str, _Preset] = {
    "default": _Preset(_default),
    "standard": _Preset(_standard),
    "english": _Preset(_english),
    "fuzzy": _Preset(_fuzzy),
    "autocomplete": _Preset(_autocomplete, index_only=True),
}


def available_analyzers() -> list[str]:
    return sorted(_ANALYZER_PRESETS)


def is_index_only(name: str) -> bool:
    preset = _ANALYZER_PRESETS.get(name.lower())
    return bool(preset and preset.index_only)


def get_analyzer(name: str | None, *, settings: Settings | None = None, for_query: bool = False) -> Analyzer:
    """Return a new analyzer for the named preset.

    Raises:
        ValueError: if the preset is unknown, or is index-only and
            ``for_query`` is set.
    """
    normalized = (name or "default").lower()
    if normalized not in _ANALYZER_PRESETS:
        msg = f"Unknown analyzer '{name}'. Available: {available_analyzers()}"
        raise ValueError(msg)
    preset = _ANALYZER_PRESETS[normalized]
    if for_query and preset.index_only:
        msg = f"Analyzer '{normalized}' is index-only and cannot be used for query analysis"
        raise ValueError(msg)
    return preset.build(settings)
