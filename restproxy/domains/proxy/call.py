"""A single API invocation.

A call belongs to the thread that created it. It is cheap: build one per
request, read its result, drop it.

    call = proxy.new_call()
    call.set_function("flickr.test.echo")
    call.set_param("name", "value")
    call.sync()
    if call.ok:
        data = call.json()

Once ``prepare`` has signed the parameters the request is frozen: any
further change would invalidate the signature, so it is refused.
"""

from __future__ import annotations

import json
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Mapping, Optional

from restproxy.core.config import HttpMethod
from restproxy.core.exceptions import CallStateError, InvalidArgumentError
from restproxy.core.logging import logger
from restproxy.core.protocols.transport import PreparedRequest, TransportResponse
from restproxy.domains.proxy.types import CallState

if TYPE_CHECKING:
    from restproxy.domains.proxy.proxy import Proxy


def join_url(base: str, function: Optional[str]) -> str:
    """Append ``function`` to ``base`` with exactly one slash between them."""
    if not function:
        return base
    if base.endswith("/") and function.startswith("/"):
        return base + function[1:]
    if base.endswith("/") or function.startswith("/"):
        return base + function
    return f"{base}/{function}"


class Call:
    """One logical API invocation: function, method, parameters, result."""

    def __init__(self, proxy: "Proxy") -> None:
        """Create a NEW call bound to ``proxy``. Use ``Proxy.new_call``."""
        self._proxy = proxy
        self._function: Optional[str] = None
        self._method: str = HttpMethod.GET.value
        self._params: dict[str, str] = {}
        self._headers: dict[str, str] = {}
        self._state = CallState.NEW
        self._request: Optional[PreparedRequest] = None
        self._response: Optional[TransportResponse] = None
        self._error: Optional[BaseException] = None
        self._logger = logger.with_context(signer=proxy.signer.kind.value)

    # ------------------------------------------------------------------
    # Building
    # ------------------------------------------------------------------

    @property
    def proxy(self) -> "Proxy":
        return self._proxy

    @property
    def state(self) -> CallState:
        return self._state

    @property
    def function(self) -> Optional[str]:
        return self._function

    @property
    def method(self) -> str:
        return self._method

    @property
    def params(self) -> Mapping[str, str]:
        """Read-only view of the current parameters."""
        return MappingProxyType(self._params)

    @property
    def headers(self) -> Mapping[str, str]:
        """Read-only view of the headers added to this call."""
        return MappingProxyType(self._headers)

    def _require_state(self, action: str, *allowed: CallState) -> None:
        if self._state not in allowed:
            raise CallStateError(self._state.value, f"Cannot {action}")

    def set_function(self, function: Optional[str]) -> None:
        """Set the function (path segment or API method) to invoke."""
        self._require_state("change the function", CallState.NEW)
        self._function = function

    def set_method(self, method: HttpMethod | str) -> None:
        """Set the HTTP method. Defaults to GET."""
        self._require_state("change the method", CallState.NEW)
        if isinstance(method, HttpMethod):
            self._method = method.value
            return
        try:
            self._method = HttpMethod(str(method).upper()).value
        except ValueError as exc:
            raise InvalidArgumentError("method", f"Unsupported HTTP method {method!r}") from exc

    def set_param(self, key: str, value: Any) -> None:
        """Add or overwrite a parameter. Values are rendered with ``str``."""
        self._require_state("change parameters", CallState.NEW)
        if not key:
            raise InvalidArgumentError("key")
        if value is None:
            raise InvalidArgumentError(key, "Parameter value is None")
        self._params[key] = str(value)

    def set_params(self, params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> None:
        """Add or overwrite several parameters at once."""
        for key, value in {**(params or {}), **kwargs}.items():
            self.set_param(key, value)

    def get_param(self, key: str) -> Optional[str]:
        return self._params.get(key)

    def remove_param(self, key: str) -> None:
        """Drop a parameter; missing keys are ignored."""
        self._require_state("change parameters", CallState.NEW)
        self._params.pop(key, None)

    def add_header(self, name: str, value: str) -> None:
        self._require_state("change headers", CallState.NEW)
        if not name:
            raise InvalidArgumentError("name")
        self._headers[name] = value

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def prepare(self) -> PreparedRequest:
        """Sign the call and freeze the request.

        Credentials are read from the proxy now, not when the call was
        created. A call is prepared once; preparing it again raises rather
        than reuse a stale timestamp and nonce.

        Raises:
            CallStateError: If the call is not NEW.
            ConfigurationError: If the proxy URL is unbound or the signer
                lacks credentials.
        """
        self._require_state("prepare", CallState.NEW)

        base_url = self._proxy.bound_url
        self._proxy.signer.sign(self, self._proxy.credentials)

        headers = {"User-Agent": self._proxy.user_agent}
        headers.update(self._headers)
        self._request = PreparedRequest(
            method=self._method,
            url=join_url(base_url, self._function),
            params=MappingProxyType(dict(self._params)),
            headers=MappingProxyType(headers),
        )
        self._state = CallState.PREPARED
        self._logger.debug(
            f"Prepared {self._method} {self._request.url} with {len(self._params)} params"
        )
        return self._request

    def _begin_send(self) -> PreparedRequest:
        self._require_state("send", CallState.PREPARED)
        self._state = CallState.IN_FLIGHT
        return self._request

    def _finish(self, response: TransportResponse) -> None:
        self._response = response
        self._state = CallState.DONE
        self._logger.debug(f"Call to {self._request.url} answered {response.status_code}")

    def _fail(self, exc: BaseException) -> None:
        self._error = exc
        self._state = CallState.FAILED
        self._logger.warning(f"Call to {self._request.url} failed: {exc!r}")

    def send(self) -> "Call":
        """Send the prepared request and block until it completes.

        Any HTTP status, 4xx and 5xx included, leaves the call DONE; check
        ``status_code`` or ``ok``. A transport fault or an interrupted send
        leaves it FAILED with the exception on ``error``.

        Returns:
            This call.

        Raises:
            CallStateError: If the call is not PREPARED.
            TransportError: If no HTTP response was obtained.
        """
        request = self._begin_send()
        try:
            response = self._proxy.transport.send(request)
        except BaseException as exc:
            self._fail(exc)
            raise
        self._finish(response)
        return self

    def sync(self) -> "Call":
        """Prepare and send in one step."""
        self.prepare()
        return self.send()

    async def send_async(self) -> "Call":
        """Async counterpart of :meth:`send`, using the proxy's async transport."""
        request = self._begin_send()
        try:
            response = await self._proxy.async_transport.send(request)
        except BaseException as exc:
            self._fail(exc)
            raise
        self._finish(response)
        return self

    async def invoke_async(self) -> "Call":
        """Prepare and send through the async transport."""
        self.prepare()
        return await self.send_async()

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    @property
    def request(self) -> Optional[PreparedRequest]:
        """The frozen request, once prepared."""
        return self._request

    @property
    def error(self) -> Optional[BaseException]:
        """The transport error, or the cancellation, of a FAILED call."""
        return self._error

    def _require_response(self) -> TransportResponse:
        self._require_state("read the response", CallState.DONE)
        return self._response

    @property
    def status_code(self) -> int:
        return self._require_response().status_code

    @property
    def reason(self) -> str:
        return self._require_response().reason

    @property
    def ok(self) -> bool:
        """True for a 2xx status."""
        return 200 <= self.status_code < 300

    @property
    def response_headers(self) -> Mapping[str, str]:
        return self._require_response().headers

    @property
    def payload(self) -> bytes:
        return self._require_response().content

    @property
    def text(self) -> str:
        return self.payload.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.payload)
