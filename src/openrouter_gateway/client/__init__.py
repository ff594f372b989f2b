"""Client interfaces for the OpenRouter gateway."""

from openrouter_gateway.client.async_client import GatewayConfig, OpenRouterClient

__all__ = ["GatewayConfig", "OpenRouterClient"]
