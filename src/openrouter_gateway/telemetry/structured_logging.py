"""Structured (JSON Lines) request logging for the gateway client.

Every ``send`` emits one event on the ``openrouter_gateway.requests`` logger,
serialized as a single JSON object. By default the event propagates to the
standard logging tree; ``configure_request_log`` redirects it to a dedicated
JSONL file instead.

Event Schema:
    - event: Always ``gateway_request``
    - timestamp: ISO 8601 timestamp (auto-injected if missing)
    - request_id, model, operation, status, latency_ms
    - error_type, error_message, status_code (failures only)
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

REQUEST_LOGGER = logging.getLogger("openrouter_gateway.requests")


def configure_request_log(path: Path) -> None:
    """Write request events to ``path`` (JSONL) instead of propagating them.

    Calling again with the same path is a no-op.
    """
    path = Path(path)
    for handler in REQUEST_LOGGER.handlers:
        if (
            isinstance(handler, logging.FileHandler)
            and Path(handler.baseFilename).resolve() == path.resolve()
        ):
            return

    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(message)s"))
    REQUEST_LOGGER.addHandler(handler)
    REQUEST_LOGGER.setLevel(logging.INFO)
    REQUEST_LOGGER.propagate = False


def _json_default(value: Any) -> Any:
    """Fallback serializer for datetime and Path objects."""
    match value:
        case datetime():
            return TypeAdapter(datetime).dump_python(value, mode="json")
        case _:
            return str(value)


def log_request_event(event: dict[str, Any]) -> None:
    """Emit a structured request event.

    Injects ``timestamp`` when missing (mutates ``event``).

    Example:
        >>> log_request_event({
        ...     "event": "gateway_request",
        ...     "operation": "chat",
        ...     "status": "success",
        ...     "model": "openai/gpt-4o-mini",
        ...     "latency_ms": 812.4,
        ... })
    """
    event.setdefault("timestamp", datetime.now(UTC).isoformat())
    REQUEST_LOGGER.info(json.dumps(event, default=_json_default))


__all__ = ["REQUEST_LOGGER", "configure_request_log", "log_request_event"]
