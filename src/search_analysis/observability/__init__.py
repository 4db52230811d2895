"""Observability module for structured logging and metrics."""

from search_analysis.observability.context import get_trace_context
from search_analysis.observability.logging import (
    JsonFormatter,
    configure_log_exporter,
    configure_logging,
    init_log_exporter,
)
from search_analysis.observability.metrics import (
    ANALYSIS_CALLS,
    ANALYSIS_LATENCY,
    ANALYSIS_TOKENS,
    ERROR_COUNT,
    configure_metrics_exporter,
    get_metrics,
    get_metrics_content_type,
    init_metrics,
    track_latency,
)


__all__ = [
    "ANALYSIS_CALLS",
    "ANALYSIS_LATENCY",
    "ANALYSIS_TOKENS",
    "ERROR_COUNT",
    "JsonFormatter",
    "configure_log_exporter",
    "configure_logging",
    "configure_metrics_exporter",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "init_log_exporter",
    "init_metrics",
    "track_latency",
]
