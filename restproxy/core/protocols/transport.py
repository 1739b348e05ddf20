"""Transport protocols.

A transport takes a fully prepared request (signed parameters included) and
returns whatever the server answered. Encoding of the parameters (query
string or form body) is the transport's business; their names and values
are not.

Implementations must raise ``TransportError`` when no HTTP response was
obtained and must return normally for every HTTP status, 4xx and 5xx
included.

Usage::

    from restproxy.core.protocols.transport import Transport


    def ping(transport: Transport) -> int:
        request = PreparedRequest(method="GET", url="http://localhost/ping")
        return transport.send(request).status_code
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Protocol, runtime_checkable


@dataclass(frozen=True)
class PreparedRequest:
    """Snapshot of a call at send time."""

    method: str
    url: str
    params: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class TransportResponse:
    """Status line, headers and raw body of an HTTP response."""

    status_code: int
    content: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)
    reason: str = ""


@runtime_checkable
class Transport(Protocol):
    """Blocking transport. One instance may be shared across threads only if
    the implementation says it supports concurrent dispatch.
    """

    def send(self, request: PreparedRequest) -> TransportResponse:
        """Send ``request`` and block until the response arrives.

        Args:
            request: The prepared request.

        Returns:
            The server's response, whatever its status.

        Raises:
            TransportError: If no HTTP response could be obtained.
        """
        ...

    def close(self) -> None:
        """Release pooled connections."""
        ...


@runtime_checkable
class AsyncTransport(Protocol):
    """asyncio counterpart of :class:`Transport`."""

    async def send(self, request: PreparedRequest) -> TransportResponse:
        """Send ``request`` and await the response."""
        ...

    async def aclose(self) -> None:
        """Release pooled connections."""
        ...
