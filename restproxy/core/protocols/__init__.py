"""Core protocols for dependency injection.

Domain-specific protocols (signers) live in their domains/ directories.
This module keeps cross-cutting infrastructure protocols only.
"""

from restproxy.core.protocols.transport import (
    AsyncTransport,
    PreparedRequest,
    Transport,
    TransportResponse,
)

__all__ = [
    "AsyncTransport",
    "PreparedRequest",
    "Transport",
    "TransportResponse",
]
