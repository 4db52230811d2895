"""Tokenizers that split raw text into an initial token stream."""

from __future__ import annotations

from collections.abc import Iterator
import re

from search_analysis.analysis.tokens import Token


# Runs of anything that is neither a word character nor an apostrophe.
DEFAULT_SEPARATOR_PATTERN = r"[^\w']+"


class RegexTokenizer:
    """Tokenizer that splits text on a separator pattern.

    The text between two separator matches becomes a token. Positions are
    assigned in emission order starting at 0 and ``start_offset`` is the end
    of the preceding separator (0 for the first token). A separator at the
    very start of the text therefore yields an empty leading token, while a
    separator that runs to the end of the text yields no trailing token.
    """

    def __init__(self, pattern: str | re.Pattern[str] = DEFAULT_SEPARATOR_PATTERN, flags: int = re.UNICODE) -> None:
        if isinstance(pattern, re.Pattern):
            self.pattern = pattern
        else:
            self.pattern = re.compile(pattern, flags)

    def __call__(self, text: str) -> Iterator[Token]:
        string_end = len(text)
        last_separator_end = 0
        position = 0
        for match in self.pattern.finditer(text):
            yield Token(
                term=text[last_separator_end : match.start()],
                position=position,
                start_offset=last_separator_end,
            )
            position += 1
            last_separator_end = match.end()

        if last_separator_end != string_end:
            yield Token(
                term=text[last_separator_end:string_end],
                position=position,
                start_offset=last_separator_end,
            )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.pattern.pattern!r})"
