"""httpx-backed transports.

Implements the Transport and AsyncTransport protocols. Parameters go in
the query string for methods without a body and in a form-encoded body
otherwise.

``httpx.Client`` keeps a thread-safe connection pool, so one
``HttpxTransport`` may serve calls issued from several threads at once.
"""

from typing import Optional

import httpx

from restproxy.core.config import settings
from restproxy.core.exceptions import TransportError
from restproxy.core.protocols.transport import PreparedRequest, TransportResponse

BODYLESS_METHODS = frozenset({"GET", "HEAD", "DELETE"})


def _build_request_kwargs(request: PreparedRequest) -> dict:
    kwargs: dict = {"headers": dict(request.headers)}
    if request.params:
        if request.method.upper() in BODYLESS_METHODS:
            kwargs["params"] = dict(request.params)
        else:
            kwargs["data"] = dict(request.params)
    return kwargs


def _to_transport_response(response: httpx.Response) -> TransportResponse:
    return TransportResponse(
        status_code=response.status_code,
        content=response.content,
        headers=dict(response.headers),
        reason=response.reason_phrase,
    )


def _to_transport_error(request: PreparedRequest, exc: httpx.HTTPError) -> TransportError:
    if isinstance(exc, httpx.TimeoutException):
        return TransportError(request.url, f"Request timed out: {exc}")
    if isinstance(exc, httpx.ConnectError):
        return TransportError(request.url, f"Could not connect: {exc}")
    return TransportError(request.url, f"Request failed: {exc}")


class HttpxTransport:
    """Blocking transport over a single ``httpx.Client``."""

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Create the transport.

        Args:
            client: Pre-built client to use. When omitted a client is
                created and owned by this transport.
            timeout: Seconds before a request is abandoned. Defaults to
                ``settings.TIMEOUT_SECONDS``.
        """
        self._owns_client = client is None
        self._client = client or httpx.Client(
            timeout=timeout if timeout is not None else settings.TIMEOUT_SECONDS,
            trust_env=settings.TRUST_ENV,
        )

    def send(self, request: PreparedRequest) -> TransportResponse:
        """Send the request; every HTTP status is returned, never raised.

        Raises:
            TransportError: On timeout, connection failure or a malformed
                response.
        """
        try:
            response = self._client.request(
                request.method, request.url, **_build_request_kwargs(request)
            )
        except httpx.HTTPError as exc:
            raise _to_transport_error(request, exc) from exc
        return _to_transport_response(response)

    def close(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            self._client.close()


class HttpxAsyncTransport:
    """asyncio transport over a single ``httpx.AsyncClient``."""

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Create the transport. Arguments mirror :class:`HttpxTransport`."""
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.TIMEOUT_SECONDS,
            trust_env=settings.TRUST_ENV,
        )

    async def send(self, request: PreparedRequest) -> TransportResponse:
        """Send the request; every HTTP status is returned, never raised."""
        try:
            response = await self._client.request(
                request.method, request.url, **_build_request_kwargs(request)
            )
        except httpx.HTTPError as exc:
            raise _to_transport_error(request, exc) from exc
        return _to_transport_response(response)

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._owns_client:
            await self._client.aclose()
