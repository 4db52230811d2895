"""Token value type and the callable protocols that produce and transform tokens."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import Protocol


@dataclass(frozen=True, slots=True)
class Token:
    """A single analysed term.

    ``position`` is the ordinal assigned by the tokenizer and ``start_offset``
    the character offset where the source token began. Filters that expand a
    token into several derived tokens copy both fields from the parent, so
    ``(position, start_offset)`` always identifies the original span.
    """

    term: str
    position: int
    start_offset: int

    def with_term(self, term: str) -> Token:
        if term == self.term:
            return self
        return replace(self, term=term)

    def as_tuple(self) -> tuple[str, int, int]:
        return (self.term, self.position, self.start_offset)


class Tokenizer(Protocol):
    """Protocol implemented by tokenizers."""

    def __call__(self, text: str) -> Iterable[Token]:  # pragma: no cover - interface definition
        ...


class TokenFilter(Protocol):
    """Protocol implemented by token filters.

    A filter receives one token and returns the tokens that replace it: an
    empty sequence rejects it, a single token passes or transforms it and
    several tokens expand it.
    """

    def __call__(self, token: Token) -> Iterable[Token]:  # pragma: no cover - interface definition
        ...
