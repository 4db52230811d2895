"""Prometheus metrics for analysis throughput with optional OTel instruments.

Instruments are created from the OpenTelemetry API's global meter, which is a
proxy until an application installs a MeterProvider. Nothing here installs one
implicitly; call ``init_metrics`` or ``configure_metrics_exporter`` to opt in.
"""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING, Any

from opentelemetry import metrics as otel_metrics
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import (
    OTLPMetricExporter as GrpcOTLPMetricExporter,
)
from opentelemetry.exporter.otlp.proto.http.metric_exporter import (
    OTLPMetricExporter as HttpOTLPMetricExporter,
)
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import MetricReader, PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator

    from search_analysis.config import ObservabilityCollectorConfig


_meter_holder: dict[str, Any] = {"meter": None, "provider": None}


def init_metrics(
    service_name: str = "search-analysis",
    resource_attributes: dict[str, str] | None = None,
    metric_readers: list[MetricReader] | None = None,
) -> MeterProvider:
    """Install a process-wide OpenTelemetry MeterProvider.

    Only call this from application start-up code; analysis never does.
    """
    provider = _meter_holder.get("provider")
    if isinstance(provider, MeterProvider):
        return provider

    attributes = {"service.name": service_name}
    if resource_attributes:
        attributes.update(resource_attributes)
    resource = Resource.create(attributes)
    provider = MeterProvider(resource=resource, metric_readers=metric_readers or [])
    otel_metrics.set_meter_provider(provider)
    _meter_holder["provider"] = provider
    return provider


def configure_metrics_exporter(config: ObservabilityCollectorConfig | None) -> MeterProvider | None:
    """Export analysis metrics over OTLP when ``config`` enables it."""
    if not config or not config.enabled:
        return None

    if config.otlp_protocol == "grpc":
        exporter = GrpcOTLPMetricExporter(
            endpoint=config.collector_endpoint,
            headers=config.headers,
            timeout=config.timeout_seconds,
            insecure=config.grpc_insecure,
        )
    else:
        exporter = HttpOTLPMetricExporter(
            endpoint=config.collector_endpoint,
            headers=config.headers,
            timeout=config.timeout_seconds,
        )

    return init_metrics(
        resource_attributes=dict(config.resource_attributes),
        metric_readers=[PeriodicExportingMetricReader(exporter)],
    )


def _get_meter():
    meter = _meter_holder.get("meter")
    if meter is None:
        meter = otel_metrics.get_meter(__name__)
        _meter_holder["meter"] = meter
    return meter


class _BoundMetric:
    def __init__(self, wrapper: MetricBridge, labels: dict[str, str]) -> None:
        self._wrapper = wrapper
        self._labels = labels

    def inc(self, amount: float = 1.0) -> None:
        self._wrapper.inc(self._labels, amount)

    def observe(self, value: float) -> None:
        self._wrapper.observe(self._labels, value)


class MetricBridge:
    """Bridge Prometheus metrics to OTel instruments."""

    def __init__(
        self,
        prom_metric: Counter | Histogram,
        *,
        otel_name: str,
        otel_description: str,
        otel_kind: str,
    ) -> None:
        self._prom_metric = prom_metric
        self._otel_name = otel_name
        self._otel_description = otel_description
        self._otel_kind = otel_kind
        self._otel_instrument = None

    def labels(self, **labels: str) -> _BoundMetric:
        return _BoundMetric(self, labels)

    def _ensure_otel_instrument(self):
        if self._otel_instrument is not None:
            return self._otel_instrument
        meter = _get_meter()
        if self._otel_kind == "counter":
            self._otel_instrument = meter.create_counter(self._otel_name, description=self._otel_description)
        elif self._otel_kind == "histogram":
            self._otel_instrument = meter.create_histogram(self._otel_name, description=self._otel_description)
        else:
            raise ValueError(f"Unknown metric kind: {self._otel_kind}")
        return self._otel_instrument

    def inc(self, labels: dict[str, str], amount: float) -> None:
        self._prom_metric.labels(**labels).inc(amount)
        otel = self._ensure_otel_instrument()
        otel.add(amount, labels)

    def observe(self, labels: dict[str, str], value: float) -> None:
        self._prom_metric.labels(**labels).observe(value)
        otel = self._ensure_otel_instrument()
        otel.record(value, labels)


_ANALYSIS_CALLS_PROM = Counter(
    "analysis_calls_total",
    "Total analyze() calls",
    ["analyzer"],
)

_ANALYSIS_TOKENS_PROM = Counter(
    "analysis_tokens_total",
    "Tokens emitted by analyzers",
    ["analyzer"],
)

_ANALYSIS_LATENCY_PROM = Histogram(
    "analysis_latency_seconds",
    "Time spent consuming an analysis token stream",
    ["analyzer"],
    buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5),
)

_ERROR_COUNT_PROM = Counter(
    "analysis_errors_total",
    "Total analysis errors",
    ["error_type", "component"],
)

ANALYSIS_CALLS = MetricBridge(
    _ANALYSIS_CALLS_PROM,
    otel_name="analysis_calls_total",
    otel_description="Total analyze() calls",
    otel_kind="counter",
)

ANALYSIS_TOKENS = MetricBridge(
    _ANALYSIS_TOKENS_PROM,
    otel_name="analysis_tokens_total",
    otel_description="Tokens emitted by analyzers",
    otel_kind="counter",
)

ANALYSIS_LATENCY = MetricBridge(
    _ANALYSIS_LATENCY_PROM,
    otel_name="analysis_latency_seconds",
    otel_description="Time spent consuming an analysis token stream",
    otel_kind="histogram",
)

ERROR_COUNT = MetricBridge(
    _ERROR_COUNT_PROM,
    otel_name="analysis_errors_total",
    otel_description="Total analysis errors",
    otel_kind="counter",
)


@contextmanager
def track_latency(histogram: MetricBridge, **labels: str) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.labels(**labels).observe(time.perf_counter() - start)


def get_metrics() -> bytes:
    """Generate Prometheus metrics output."""
    return generate_latest()


def get_metrics_content_type() -> str:
    """Get content type for metrics endpoint."""
    return CONTENT_TYPE_LATEST
