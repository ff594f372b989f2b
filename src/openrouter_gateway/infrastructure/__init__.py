"""Infrastructure layer: concrete transports."""

from openrouter_gateway.infrastructure.transport import HttpxTransport

__all__ = ["HttpxTransport"]
