"""Built-in stop-word vocabulary."""

from __future__ import annotations


ENGLISH_STOP_WORDS: frozenset[str] = frozenset(
    {
        "a",
        "an",
        "and",
        "are",
        "as",
        "at",
        "be",
        "but",
        "by",
        "for",
        "if",
        "in",
        "into",
        "is",
        "it",
        "no",
        "not",
        "of",
        "on",
        "or",
        "such",
        "that",
        "the",
        "their",
        "then",
        "there",
        "these",
        "they",
        "this",
        "to",
        "was",
        "will",
        "with",
    }
)


def is_english_stop_word(term: str) -> bool:
    """Return True when ``term`` is in the static English stop-word set.

    The lookup is exact; place a lowercase filter ahead of the stop-word
    filter to catch capitalised forms.
    """
    return term in ENGLISH_STOP_WORDS
