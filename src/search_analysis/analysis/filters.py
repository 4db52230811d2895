"""Token filters.

Every filter is a callable taking one ``Token`` and returning the list of
tokens that replace it. Filters never renumber: derived tokens carry the
parent's ``position`` and ``start_offset`` unchanged.
"""

from __future__ import annotations

from collections.abc import Callable
import logging
import threading
import unicodedata

from search_analysis.analysis.stemming import (
    SnowballStemmerCapability,
    StemmerRegistry,
    get_default_registry,
)
from search_analysis.analysis.stopwords import is_english_stop_word
from search_analysis.analysis.tokens import Token


logger = logging.getLogger(__name__)


class LowercaseFilter:
    """Filter that lowercases token terms."""

    def __call__(self, token: Token) -> list[Token]:
        return [token.with_term(token.term.lower())]


class UnaccentFilter:
    """Filter that strips accents and diacritics.

    The term is decomposed (NFD) and every non-ASCII code point is dropped.
    This folds Latin-script accents (``café`` -> ``cafe``) but erases
    characters of scripts that do not decompose to ASCII letters.
    """

    def __call__(self, token: Token) -> list[Token]:
        decomposed = unicodedata.normalize("NFD", token.term)
        return [token.with_term(decomposed.encode("ascii", "ignore").decode("ascii"))]


class StopWordsFilter:
    """Drops tokens whose term satisfies the stop-word predicate."""

    def __init__(self, is_stop_word: Callable[[str], bool] = is_english_stop_word) -> None:
        self.is_stop_word = is_stop_word

    def __call__(self, token: Token) -> list[Token]:
        if self.is_stop_word(token.term):
            return []
        return [token]


class MinLengthFilter:
    """Drops tokens strictly shorter than ``min_length`` characters."""

    def __init__(self, min_length: int) -> None:
        if min_length < 0:
            raise ValueError(f"min_length must be >= 0, got {min_length}")
        self.min_length = min_length

    def __call__(self, token: Token) -> list[Token]:
        if len(token.term) < self.min_length:
            return []
        return [token]


class MaxLengthFilter:
    """Drops tokens strictly longer than ``max_length`` characters."""

    def __init__(self, max_length: int) -> None:
        if max_length < 0:
            raise ValueError(f"max_length must be >= 0, got {max_length}")
        self.max_length = max_length

    def __call__(self, token: Token) -> list[Token]:
        if len(token.term) > self.max_length:
            return []
        return [token]


class NGramFilter:
    """Expands a token into its character n-grams.

    Grams are produced by walking start indexes and, at each index, growing
    the gram from ``min_size`` up to ``max_size`` before moving on. For
    ``cat`` with sizes 2..3 the output is ``ca``, ``cat``, ``at``.
    """

    def __init__(self, min_size: int, max_size: int | None = None) -> None:
        if max_size is None:
            max_size = min_size
        if min_size < 1:
            raise ValueError(f"min_size must be >= 1, got {min_size}")
        if max_size < min_size:
            raise ValueError(f"max_size ({max_size}) must be >= min_size ({min_size})")
        self.min_size = min_size
        self.max_size = max_size

    def __call__(self, token: Token) -> list[Token]:
        term = token.term
        length = len(term)
        grams: list[Token] = []
        idx = 0
        gram_size = self.min_size
        while idx != length and length >= idx + gram_size:
            grams.append(token.with_term(term[idx : min(idx + gram_size, length)]))
            if gram_size < self.max_size:
                gram_size += 1
            else:
                idx += 1
                gram_size = self.min_size
        return grams


class PrefixFilter:
    """Replaces a token with every one of its prefixes, shortest first.

    ``vault`` becomes ``v``, ``va``, ``vau``, ``vaul``, ``vault``. Meant for
    building autocomplete indexes only; analysing queries with it would make
    every query term match as a prefix of everything.
    """

    def __call__(self, token: Token) -> list[Token]:
        term = token.term
        return [token.with_term(term[:idx]) for idx in range(1, len(term) + 1)]


class StemmingFilter:
    """Replaces each term with its Snowball stem.

    Stemmers carry mutable state, so each thread that runs this filter gets
    its own stemmer, resolved on first use. Pass ``eager=True`` to resolve the
    language when the filter is built instead of when the first token arrives.
    """

    def __init__(self, language: str, *, registry: StemmerRegistry | None = None, eager: bool = False) -> None:
        self.language = language
        self.registry = registry or get_default_registry()
        self._local = threading.local()
        if eager:
            self._local.stemmer = self.registry.resolve(language)

    def _stemmer(self) -> SnowballStemmerCapability:
        stemmer = getattr(self._local, "stemmer", None)
        if stemmer is None:
            stemmer = self.registry.resolve(self.language)
            self._local.stemmer = stemmer
            logger.debug(
                "Stemmer for %s bound to thread %s",
                self.language,
                threading.current_thread().name,
                extra={"language": self.language},
            )
        return stemmer

    def __call__(self, token: Token) -> list[Token]:
        stemmer = self._stemmer()
        stemmer.set_input(token.term)
        return [token.with_term(stemmer.stemmed_result())]


lowercase_filter = LowercaseFilter()
unaccent_filter = UnaccentFilter()
en_stop_words_filter = StopWordsFilter(is_english_stop_word)
prefix_filter = PrefixFilter()


def stop_words_filter(is_stop_word: Callable[[str], bool]) -> StopWordsFilter:
    return StopWordsFilter(is_stop_word)


def min_length_filter(min_length: int) -> MinLengthFilter:
    return MinLengthFilter(min_length)


def max_length_filter(max_length: int) -> MaxLengthFilter:
    return MaxLengthFilter(max_length)


def ngram_filter(min_size: int, max_size: int | None = None) -> NGramFilter:
    return NGramFilter(min_size, max_size)


def stemming_filter(language: str, *, eager: bool = False) -> StemmingFilter:
    return StemmingFilter(language, eager=eager)
