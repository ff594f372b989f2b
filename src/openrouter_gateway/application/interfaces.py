"""Interfaces (Protocols) for gateway client dependencies.

The client depends on a structural transport interface rather than a
concrete HTTP stack, so tests and alternative transports can be injected.
"""

from __future__ import annotations

from typing import Any, Protocol


class TransportInterface(Protocol):
    """Protocol for transport implementations.

    Implementations perform exactly one HTTP call per ``execute`` and never
    retry.
    """

    async def execute(
        self,
        url: str,
        body: dict[str, Any],
        headers: dict[str, str],
        timeout: float,
    ) -> Any:
        """POST ``body`` to ``url`` and return the decoded JSON response.

        Args:
            url: Absolute endpoint URL.
            body: JSON-serializable request body.
            headers: Request headers, including authorization.
            timeout: Deadline for the whole attempt, in seconds.

        Returns:
            Decoded JSON body of a 2xx response.

        Raises:
            GatewayAPIError: Non-2xx status.
            GatewayTimeoutError: Deadline exceeded.
            GatewayNetworkError: Connection failure.
            ResponseFormatError: 2xx body that is not JSON.
        """
        ...

    async def close(self) -> None:
        """Release pooled connections."""
        ...


__all__ = ["TransportInterface"]
