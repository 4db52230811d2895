"""
Text analysis pipeline.

Text is split by a tokenizer and passed through an ordered chain of token
filters:
- tokens: the Token value type and tokenizer/filter protocols
- tokenizers: regex separator tokenizer
- filters: case/diacritic folding, stop words, length bounds, n-grams,
  prefixes and stemming
- stemming: Snowball stemmer registry
- analyzer: tokenizer + filter composition
- registry: named analyzer presets
"""

from search_analysis.analysis.analyzer import Analyzer, AnalyzerOptions, build_analyzer, configure_analyzer
from search_analysis.analysis.filters import (
    LowercaseFilter,
    MaxLengthFilter,
    MinLengthFilter,
    NGramFilter,
    PrefixFilter,
    StemmingFilter,
    StopWordsFilter,
    UnaccentFilter,
    en_stop_words_filter,
    lowercase_filter,
    max_length_filter,
    min_length_filter,
    ngram_filter,
    prefix_filter,
    stemming_filter,
    stop_words_filter,
    unaccent_filter,
)
from search_analysis.analysis.registry import available_analyzers, get_analyzer
from search_analysis.analysis.stemming import StemmerRegistry, UnknownLanguageError
from search_analysis.analysis.stopwords import ENGLISH_STOP_WORDS, is_english_stop_word
from search_analysis.analysis.tokenizers import DEFAULT_SEPARATOR_PATTERN, RegexTokenizer
from search_analysis.analysis.tokens import Token, TokenFilter, Tokenizer


__all__ = [
    "DEFAULT_SEPARATOR_PATTERN",
    "ENGLISH_STOP_WORDS",
    "Analyzer",
    "AnalyzerOptions",
    "LowercaseFilter",
    "MaxLengthFilter",
    "MinLengthFilter",
    "NGramFilter",
    "PrefixFilter",
    "RegexTokenizer",
    "StemmerRegistry",
    "StemmingFilter",
    "StopWordsFilter",
    "Token",
    "TokenFilter",
    "Tokenizer",
    "UnaccentFilter",
    "UnknownLanguageError",
    "available_analyzers",
    "build_analyzer",
    "configure_analyzer",
    "en_stop_words_filter",
    "get_analyzer",
    "is_english_stop_word",
    "lowercase_filter",
    "max_length_filter",
    "min_length_filter",
    "ngram_filter",
    "prefix_filter",
    "stemming_filter",
    "stop_words_filter",
    "unaccent_filter",
]
