"""Centralized configuration for search-analysis using Pydantic Settings."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from search_analysis.analysis.tokenizers import DEFAULT_SEPARATOR_PATTERN


if TYPE_CHECKING:
    from search_analysis.analysis.analyzer import Analyzer


class ObservabilityCollectorConfig(BaseModel):
    """Configuration for OTLP log and metric export."""

    model_config = {"extra": "forbid"}

    enabled: Annotated[bool, Field(description="Enable OTLP export to an external collector")] = False

    otlp_protocol: Annotated[Literal["http", "grpc"], Field(description="OTLP transport protocol")] = "grpc"

    collector_endpoint: Annotated[
        str,
        Field(
            description="OTLP collector endpoint",
            examples=["http://localhost:4317", "http://localhost:4318/v1/logs"],
        ),
    ] = "http://localhost:4317"

    headers: Annotated[
        dict[str, str],
        Field(description="Optional headers to include with OTLP requests"),
    ] = Field(default_factory=dict)

    timeout_seconds: Annotated[
        int,
        Field(ge=1, le=60, description="OTLP exporter timeout in seconds"),
    ] = 10

    grpc_insecure: Annotated[bool, Field(description="Allow insecure gRPC (plaintext) connections")] = True

    resource_attributes: Annotated[
        dict[str, str],
        Field(description="Additional OpenTelemetry resource attributes"),
    ] = Field(default_factory=dict)


class Settings(BaseSettings):
    """Strictly typed analysis configuration loaded from environment variables.

    Every variable is read with the ``SEARCH_ANALYSIS_`` prefix, e.g.
    ``SEARCH_ANALYSIS_SEPARATOR_PATTERN``.
    """

    model_config = SettingsConfigDict(
        env_prefix="SEARCH_ANALYSIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Tokenization
    separator_pattern: str = Field(
        default=DEFAULT_SEPARATOR_PATTERN,
        description="Regular expression matching the separators between tokens",
    )
    default_analyzer: str = Field(default="default", description="Name of the analyzer preset used by default")

    # Stemming
    stemmer_language: str = Field(default="english", description="Snowball language used by stemming presets")
    eager_language_resolution: bool = Field(
        default=False,
        description="Resolve stemmer languages when analyzers are built instead of on first token",
    )

    # N-gram presets
    ngram_min_size: int = Field(default=3, ge=1, description="Smallest gram produced by the fuzzy preset")
    ngram_max_size: int = Field(default=3, ge=1, description="Largest gram produced by the fuzzy preset")

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    observability: ObservabilityCollectorConfig = Field(default_factory=ObservabilityCollectorConfig)

    @field_validator("separator_pattern")
    @classmethod
    def _check_separator_pattern(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"Invalid separator pattern {value!r}: {exc}") from exc
        return value

    @model_validator(mode="after")
    def _check_analysis_options(self) -> Settings:
        from search_analysis.analysis.registry import available_analyzers

        if self.ngram_min_size > self.ngram_max_size:
            raise ValueError(
                f"ngram_min_size ({self.ngram_min_size}) must not exceed ngram_max_size ({self.ngram_max_size})"
            )
        if self.default_analyzer.lower() not in available_analyzers():
            raise ValueError(
                f"Unknown default analyzer '{self.default_analyzer}'. Available: {available_analyzers()}"
            )
        return self

    def build_analyzer(self, name: str | None = None, *, for_query: bool = False) -> Analyzer:
        """Build the named analyzer preset (or the default one) from these settings."""
        from search_analysis.analysis.registry import get_analyzer

        return get_analyzer(name or self.default_analyzer, settings=self, for_query=for_query)

    def configure_observability(self) -> None:
        """Apply the logging and OTLP export settings to the running process.

        Libraries never call this on their own; host applications call it once
        at startup.
        """
        from search_analysis.observability.logging import configure_log_exporter, configure_logging
        from search_analysis.observability.metrics import configure_metrics_exporter

        configure_logging(self.log_level, self.log_json)
        configure_log_exporter(self.observability)
        configure_metrics_exporter(self.observability)
