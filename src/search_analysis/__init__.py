"""search-analysis: configurable text analysis for full-text indexing and querying."""

from search_analysis.analysis import (
    Analyzer,
    AnalyzerOptions,
    Token,
    UnknownLanguageError,
    configure_analyzer,
    get_analyzer,
)


__all__ = [
    "Analyzer",
    "AnalyzerOptions",
    "Token",
    "UnknownLanguageError",
    "configure_analyzer",
    "get_analyzer",
]
