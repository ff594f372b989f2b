"""In-memory metrics for gateway requests.

Key behaviors:
    - In-memory storage with automatic size limiting (max 10,000 metrics)
    - Time-window filtering for recent metrics analysis
    - Percentile latencies and per-model / per-error-kind counts
    - Timestamps are timezone-aware (UTC)
"""

from __future__ import annotations

import logging
import statistics
from collections import Counter
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any, ClassVar

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RequestMetrics:
    """Metrics for a single gateway request.

    Attributes:
        model: Model the request resolved to.
        operation: Operation name (``chat``).
        latency_ms: Wall time including throttle wait and retries.
        success: Whether the request succeeded.
        error: Error kind if the request failed.
        timestamp: UTC time the metric was recorded.
    """

    model: str
    operation: str
    latency_ms: float
    success: bool
    error: str | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(slots=True)
class ServiceMetrics:
    """Aggregated request metrics. Times are in milliseconds."""

    total_requests: int = 0
    successful_requests: int = 0
    failed_requests: int = 0
    requests_by_model: dict[str, int] = field(default_factory=dict)
    errors_by_type: dict[str, int] = field(default_factory=dict)
    average_latency_ms: float = 0.0
    p50_latency_ms: float = 0.0
    p95_latency_ms: float = 0.0
    p99_latency_ms: float = 0.0
    last_request_time: datetime | None = None
    first_request_time: datetime | None = None


class MetricsCollector:
    """Class-level metrics store shared by every client in the process.

    Not thread-safe. Intended for use from a single event loop.
    """

    _metrics: ClassVar[list[RequestMetrics]] = []
    _max_metrics: ClassVar[int] = 10_000

    @classmethod
    def record_request(
        cls,
        model: str,
        operation: str,
        latency_ms: float,
        success: bool,
        error: str | None = None,
    ) -> None:
        """Record one request outcome, trimming the oldest beyond the limit."""
        cls._metrics.append(
            RequestMetrics(
                model=model,
                operation=operation,
                latency_ms=latency_ms,
                success=success,
                error=error,
            )
        )

        if len(cls._metrics) > cls._max_metrics:
            cls._metrics = cls._metrics[-cls._max_metrics :]

        logger.debug("Recorded metric: %s on %s - %.2fms", operation, model, latency_ms)

    @classmethod
    def get_metrics(cls, window_minutes: int | None = None) -> ServiceMetrics:
        """Aggregate metrics, optionally limited to the last ``window_minutes``."""
        match window_minutes:
            case None:
                metrics = cls._metrics
            case minutes if minutes > 0:
                cutoff = datetime.now(UTC) - timedelta(minutes=minutes)
                metrics = [m for m in cls._metrics if m.timestamp >= cutoff]
            case _:
                metrics = []

        if not metrics:
            return ServiceMetrics()

        latencies = sorted(m.latency_ms for m in metrics)
        successful = sum(1 for m in metrics if m.success)

        match len(latencies):
            case n if n >= 2:
                quantiles = statistics.quantiles(latencies, n=100)
                p50, p95, p99 = quantiles[49], quantiles[94], quantiles[98]
            case _:
                p50 = p95 = p99 = latencies[0]

        return ServiceMetrics(
            total_requests=len(metrics),
            successful_requests=successful,
            failed_requests=len(metrics) - successful,
            requests_by_model=dict(Counter(m.model for m in metrics)),
            errors_by_type=dict(Counter(m.error for m in metrics if m.error)),
            average_latency_ms=sum(latencies) / len(latencies),
            p50_latency_ms=p50,
            p95_latency_ms=p95,
            p99_latency_ms=p99,
            last_request_time=max(m.timestamp for m in metrics),
            first_request_time=min(m.timestamp for m in metrics),
        )

    @classmethod
    def get_metrics_json(cls, window_minutes: int | None = None) -> dict[str, Any]:
        """Return ``get_metrics`` as a JSON-serializable dict (2 d.p. latencies)."""
        metrics = cls.get_metrics(window_minutes)
        return {
            "total_requests": metrics.total_requests,
            "successful_requests": metrics.successful_requests,
            "failed_requests": metrics.failed_requests,
            "requests_by_model": metrics.requests_by_model,
            "errors_by_type": metrics.errors_by_type,
            "average_latency_ms": round(metrics.average_latency_ms, 2),
            "p50_latency_ms": round(metrics.p50_latency_ms, 2),
            "p95_latency_ms": round(metrics.p95_latency_ms, 2),
            "p99_latency_ms": round(metrics.p99_latency_ms, 2),
            "last_request_time": (
                metrics.last_request_time.isoformat() if metrics.last_request_time else None
            ),
            "first_request_time": (
                metrics.first_request_time.isoformat() if metrics.first_request_time else None
            ),
        }

    @classmethod
    def reset(cls) -> None:
        """Drop all collected metrics."""
        cls._metrics = []


__all__ = ["MetricsCollector", "RequestMetrics", "ServiceMetrics"]
