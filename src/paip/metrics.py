"""Metrics collection primitives for paip."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from prometheus_client import CollectorRegistry, Counter, Histogram, write_to_textfile

from .config import MetricsConfig


@dataclass
class MetricsEvent:
    """Structured metrics payload for one LLM request."""

    provider: str
    model: str
    status: str
    duration_ms: float
    error_kind: Optional[str] = None


class MetricsCollector(Protocol):
    """Protocol for collecting metrics events."""

    def record(self, event: MetricsEvent) -> None:
        """Persist or emit the metrics event."""


class LoggingMetricsCollector(MetricsCollector):
    """Default metrics collector that logs structured events."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger("paip.metrics")

    def record(self, event: MetricsEvent) -> None:
        payload = {
            "provider": event.provider,
            "model": event.model,
            "status": event.status,
            "duration_ms": round(event.duration_ms, 3),
            "error_kind": event.error_kind,
        }
        self._logger.info("request_metrics", extra={"metrics": payload})


class PrometheusMetricsCollector(MetricsCollector):
    """Metrics collector backed by a private Prometheus registry.

    A process run issues a single request, so there is no scrape endpoint;
    when ``textfile`` is given the registry is dumped there after every
    event for node-exporter's textfile collector.
    """

    def __init__(
        self,
        *,
        textfile: Optional[Path] = None,
        registry: Optional[CollectorRegistry] = None,
    ) -> None:
        self._textfile = textfile
        self._registry = registry or CollectorRegistry()
        self._requests = Counter(
            "paip_requests_total",
            "Total LLM requests",
            ["provider", "model", "status", "error_kind"],
            registry=self._registry,
        )
        self._duration = Histogram(
            "paip_request_duration_seconds",
            "LLM request duration",
            ["provider", "status"],
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def record(self, event: MetricsEvent) -> None:
        self._requests.labels(
            provider=event.provider,
            model=event.model,
            status=event.status,
            error_kind=event.error_kind or "none",
        ).inc()
        self._duration.labels(
            provider=event.provider,
            status=event.status,
        ).observe(max(event.duration_ms / 1000.0, 0.0))

        if self._textfile is not None:
            self._textfile.parent.mkdir(parents=True, exist_ok=True)
            write_to_textfile(str(self._textfile), self._registry)


def create_metrics_collector(config: MetricsConfig) -> MetricsCollector:
    if config.backend == "prometheus":
        return PrometheusMetricsCollector(textfile=config.textfile)
    return LoggingMetricsCollector()
