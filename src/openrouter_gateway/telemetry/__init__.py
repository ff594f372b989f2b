"""Telemetry utilities (metrics, structured logging)."""

from openrouter_gateway.telemetry.metrics import (
    MetricsCollector,
    RequestMetrics,
    ServiceMetrics,
)
from openrouter_gateway.telemetry.structured_logging import (
    configure_request_log,
    log_request_event,
)

__all__ = [
    "MetricsCollector",
    "RequestMetrics",
    "ServiceMetrics",
    "configure_request_log",
    "log_request_event",
]
