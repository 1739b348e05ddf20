"""Fake transports for testing.

Answer every request from a routing table keyed by URL path, and record
what was sent so tests can assert on the signed parameters.
"""

from __future__ import annotations

import threading
from typing import Optional
from urllib.parse import urlsplit

from restproxy.core.exceptions import TransportError
from restproxy.core.protocols.transport import PreparedRequest, TransportResponse


class FakeTransport:
    """Test implementation of Transport.

    Unrouted paths answer ``default_status``. Recording is guarded by a lock
    so the fake can be shared by threads.

    Usage::

        fake = FakeTransport()
        fake.seed_response("/ping", TransportResponse(status_code=200))
        proxy = new_proxy(base_url="http://fake/", transport=fake)

        call = proxy.new_call()
        call.set_function("ping")
        call.sync()

        assert fake.requests[0].url == "http://fake/ping"
    """

    def __init__(self, default_status: int = 501) -> None:
        self.default_status = default_status
        self.requests: list[PreparedRequest] = []
        self.closed = False
        self._routes: dict[str, TransportResponse] = {}
        self._error: Optional[TransportError] = None
        self._lock = threading.Lock()

    def seed_response(self, path: str, response: TransportResponse) -> None:
        """Answer requests for ``path`` with ``response``."""
        self._routes[path] = response

    def seed_error(self, message: str = "Connection refused") -> None:
        """Make every subsequent send fail at the transport level."""
        self._error = TransportError("fake", message)

    def _respond(self, request: PreparedRequest) -> TransportResponse:
        with self._lock:
            self.requests.append(request)
        if self._error is not None:
            raise TransportError(request.url, self._error.message)
        path = urlsplit(request.url).path
        return self._routes.get(path, TransportResponse(status_code=self.default_status))

    def send(self, request: PreparedRequest) -> TransportResponse:
        return self._respond(request)

    def close(self) -> None:
        self.closed = True

    # Test helpers

    @property
    def last_request(self) -> PreparedRequest:
        """The most recent request sent."""
        return self.requests[-1]

    @property
    def request_count(self) -> int:
        """Total number of requests sent."""
        return len(self.requests)


class FakeAsyncTransport(FakeTransport):
    """Test implementation of AsyncTransport sharing the sync fake's routing."""

    async def send(self, request: PreparedRequest) -> TransportResponse:  # type: ignore[override]
        return self._respond(request)

    async def aclose(self) -> None:
        self.closed = True
