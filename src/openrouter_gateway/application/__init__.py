"""Application layer interfaces for the OpenRouter gateway client."""

from openrouter_gateway.application.interfaces import TransportInterface

__all__ = ["TransportInterface"]
