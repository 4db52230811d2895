"""Stemmer registry backed by the Snowball stemming algorithms.

Snowball stemmers keep the word being stemmed in a mutable buffer, so an
instance must never be driven by two threads at once. The registry therefore
hands out a fresh capability on every ``resolve`` call; callers that want
reuse keep one capability per worker (see ``StemmingFilter``).
"""

from __future__ import annotations

import logging
from typing import Protocol

import snowballstemmer

from search_analysis.observability.metrics import ERROR_COUNT


logger = logging.getLogger(__name__)


class UnknownLanguageError(LookupError):
    """Raised when no stemmer is registered for the requested language."""

    def __init__(self, language: str, available: list[str] | None = None) -> None:
        self.language = language
        self.available = sorted(available or [])
        msg = f"Unknown stemmer language '{language}'. Available: {self.available}"
        super().__init__(msg)


class StemmerCapability(Protocol):
    """Stateful stemmer: load a word, then read back its stem."""

    def set_input(self, word: str) -> None:  # pragma: no cover - interface definition
        ...

    def stemmed_result(self) -> str:  # pragma: no cover - interface definition
        ...


class _WordStemmer(Protocol):
    """What ``snowballstemmer.stemmer()`` returns, pure-Python or PyStemmer-backed."""

    def stemWord(self, word: str) -> str:  # noqa: N802 - library method name
        ...


class SnowballStemmerCapability:
    """Adapts a ``snowballstemmer`` stemmer to the capability protocol."""

    def __init__(self, language: str, stemmer: _WordStemmer) -> None:
        self.language = language
        self._stemmer = stemmer
        self._current = ""

    def set_input(self, word: str) -> None:
        self._current = word

    def stemmed_result(self) -> str:
        return self._stemmer.stemWord(self._current)

    def stem(self, word: str) -> str:
        self.set_input(word)
        return self.stemmed_result()


class StemmerRegistry:
    """Resolves language names to fresh stemmer capabilities."""

    def __init__(self, languages: list[str] | None = None) -> None:
        names = languages if languages is not None else snowballstemmer.algorithms()
        self._languages = frozenset(name.lower() for name in names)

    def available_languages(self) -> list[str]:
        return sorted(self._languages)

    def is_registered(self, language: str) -> bool:
        return language.lower() in self._languages

    def resolve(self, language: str) -> SnowballStemmerCapability:
        """Return a new stemmer capability for ``language``.

        Raises:
            UnknownLanguageError: if the language has no registered stemmer.
        """
        normalized = language.lower()
        if normalized not in self._languages:
            ERROR_COUNT.labels(error_type="UnknownLanguageError", component="stemming").inc()
            raise UnknownLanguageError(language, list(self._languages))
        try:
            stemmer = snowballstemmer.stemmer(normalized)
        except KeyError as exc:
            ERROR_COUNT.labels(error_type="UnknownLanguageError", component="stemming").inc()
            raise UnknownLanguageError(language, list(self._languages)) from exc
        logger.debug("Resolved stemmer for language %s", normalized, extra={"language": normalized})
        return SnowballStemmerCapability(normalized, stemmer)


_default_registry: dict[str, StemmerRegistry | None] = {"registry": None}


def get_default_registry() -> StemmerRegistry:
    """Return the process-wide registry of Snowball languages."""
    registry = _default_registry["registry"]
    if registry is None:
        registry = StemmerRegistry()
        _default_registry["registry"] = registry
    return registry
