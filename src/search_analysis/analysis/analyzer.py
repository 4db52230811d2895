"""Analyzer composition: one tokenizer feeding an ordered chain of token filters.

Indexing and query processing must analyse text with the same analyzer
configuration, otherwise the terms they produce will not match.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping, Sequence
from itertools import chain
import logging
import time
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from search_analysis.analysis.tokenizers import RegexTokenizer
from search_analysis.analysis.tokens import Token, TokenFilter, Tokenizer
from search_analysis.observability.metrics import ANALYSIS_CALLS, ANALYSIS_LATENCY, ANALYSIS_TOKENS


logger = logging.getLogger(__name__)


class AnalyzerOptions(BaseModel):
    """Options accepted by ``configure_analyzer``."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True, extra="forbid")

    tokenizer: Callable[[str], Iterable[Token]] = Field(
        default_factory=RegexTokenizer,
        description="Callable splitting text into tokens",
    )
    token_filters: list[Callable[[Token], Iterable[Token]]] = Field(
        default_factory=list,
        description="Ordered token filters; each maps one token to zero or more tokens",
    )
    name: str = Field(default="custom", description="Label used for metrics and logs")


class Analyzer:
    """Turns text into a lazy token stream.

    Each filter is applied as a flat-map over the stream produced by the
    previous stage, so filter order matters. The returned iterator can be
    consumed once; call ``analyze`` again for a fresh stream.
    """

    def __init__(
        self,
        tokenizer: Tokenizer | None = None,
        filters: Sequence[TokenFilter] | None = None,
        *,
        name: str = "custom",
    ) -> None:
        self.tokenizer = tokenizer if tokenizer is not None else RegexTokenizer()
        self.filters = tuple(filters or ())
        self.name = name

    def analyze(self, text: str) -> Iterator[Token]:
        ANALYSIS_CALLS.labels(analyzer=self.name).inc()
        stream: Iterable[Token] = self.tokenizer(text)
        for token_filter in self.filters:
            stream = chain.from_iterable(map(token_filter, stream))
        return self._observe(stream)

    __call__ = analyze

    def _observe(self, stream: Iterable[Token]) -> Iterator[Token]:
        count = 0
        start = time.perf_counter()
        try:
            for token in stream:
                count += 1
                yield token
        finally:
            ANALYSIS_LATENCY.labels(analyzer=self.name).observe(time.perf_counter() - start)
            if count:
                ANALYSIS_TOKENS.labels(analyzer=self.name).inc(count)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, tokenizer={self.tokenizer!r}, filters={len(self.filters)})"


def build_analyzer(
    tokenizer: Tokenizer | None = None,
    filters: Sequence[TokenFilter] | None = None,
    *,
    name: str = "custom",
) -> Analyzer:
    """Compose ``tokenizer`` with ``filters`` into an analyzer."""
    return Analyzer(tokenizer, filters, name=name)


def configure_analyzer(options: AnalyzerOptions | Mapping[str, Any] | None = None) -> Analyzer:
    """Build an analyzer from ``options``.

    Without options the analyzer is the default regex tokenizer with no
    filters. A mapping is validated as ``AnalyzerOptions``.
    """
    if options is None:
        options = AnalyzerOptions()
    elif not isinstance(options, AnalyzerOptions):
        options = AnalyzerOptions.model_validate(dict(options))

    logger.debug(
        "Configured analyzer %s with %d token filter(s)",
        options.name,
        len(options.token_filters),
        extra={"analyzer": options.name},
    )
    return Analyzer(options.tokenizer, options.token_filters, name=options.name)
