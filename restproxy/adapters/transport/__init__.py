"""Transport adapters."""

from restproxy.adapters.transport.fake import FakeAsyncTransport, FakeTransport
from restproxy.adapters.transport.httpx_transport import HttpxAsyncTransport, HttpxTransport

__all__ = [
    "FakeAsyncTransport",
    "FakeTransport",
    "HttpxAsyncTransport",
    "HttpxTransport",
]
