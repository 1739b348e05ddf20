"""Proxies: a service URL plus the credentials and signer used to reach it.

Create one proxy per service session and as many calls from it as needed.
Reading a proxy from several threads is safe. Changing its token is not:
a caller that rotates tokens while other threads prepare calls on the same
proxy must serialise the two with its own lock.
"""

from __future__ import annotations

import threading
from typing import Optional

from pydantic import ValidationError

from restproxy.adapters.transport.httpx_transport import HttpxAsyncTransport, HttpxTransport
from restproxy.core.config import SignerKind, settings
from restproxy.core.exceptions import ConfigurationError, InvalidArgumentError
from restproxy.core.logging import logger
from restproxy.core.protocols.transport import AsyncTransport, Transport
from restproxy.domains.credentials.types import Credentials
from restproxy.domains.proxy.call import Call
from restproxy.domains.signing.factory import SIGNERS_NEEDING_CREDENTIALS, create_signer
from restproxy.domains.signing.protocols import Signer


class Proxy:
    """Binds a base URL, credentials and a signer; hands out calls.

    When ``binding_required`` is set, ``url_format`` is a ``str.format``
    template (``"https://{}.example.com/"``) that must be filled in with
    :meth:`bind` before any call is prepared.

    Transports passed in are borrowed and never closed by the proxy. When
    none is given, one is created on first use and closed by :meth:`close`.
    """

    def __init__(
        self,
        url_format: str,
        *,
        signer: Signer,
        credentials: Optional[Credentials] = None,
        binding_required: bool = False,
        user_agent: Optional[str] = None,
        transport: Optional[Transport] = None,
        async_transport: Optional[AsyncTransport] = None,
    ) -> None:
        """Create the proxy. Prefer :func:`new_proxy`, which validates input."""
        if not url_format:
            raise ConfigurationError("A base URL is required")
        if signer.kind in SIGNERS_NEEDING_CREDENTIALS and credentials is None:
            raise ConfigurationError(f"Signer '{signer.kind.value}' needs credentials")

        self._url_format = url_format
        self._binding_required = binding_required
        self._bound_url: Optional[str] = None if binding_required else url_format
        self._signer = signer
        self._credentials = credentials
        self._user_agent = user_agent or settings.USER_AGENT
        self._transport = transport
        self._async_transport = async_transport
        self._owns_transport = transport is None
        self._owns_async_transport = async_transport is None
        self._transport_lock = threading.Lock()
        self._closed = False
        self._logger = logger.with_context(signer=signer.kind.value)

    @property
    def url_format(self) -> str:
        return self._url_format

    @property
    def binding_required(self) -> bool:
        return self._binding_required

    @property
    def bound_url(self) -> str:
        """The URL calls are made against.

        Raises:
            ConfigurationError: If the URL format still needs binding.
        """
        if self._bound_url is None:
            raise ConfigurationError(f"URL '{self._url_format}' has not been bound")
        return self._bound_url

    def bind(self, *values: str) -> str:
        """Fill the URL template with ``values`` and return the result."""
        try:
            bound = self._url_format.format(*values)
        except (IndexError, KeyError) as exc:
            raise InvalidArgumentError(
                "values", f"Cannot bind '{self._url_format}' with {len(values)} values"
            ) from exc
        self._bound_url = bound
        self._logger.debug(f"Bound URL {bound}")
        return bound

    @property
    def signer(self) -> Signer:
        return self._signer

    @property
    def credentials(self) -> Optional[Credentials]:
        return self._credentials

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def token(self) -> Optional[str]:
        """The current request or access token, or None if there is none yet."""
        return self._credentials.token if self._credentials else None

    @property
    def token_secret(self) -> Optional[str]:
        return self._credentials.token_secret if self._credentials else None

    def _require_credentials(self) -> Credentials:
        if self._credentials is None:
            raise ConfigurationError("This proxy has no credentials")
        return self._credentials

    def set_token(self, token: Optional[str]) -> None:
        """Replace the token used by calls prepared from now on.

        Not synchronised: see the module docstring.
        """
        self._require_credentials().token = token

    def set_token_secret(self, token_secret: Optional[str]) -> None:
        """Replace the token secret used by calls prepared from now on."""
        self._require_credentials().token_secret = token_secret

    @property
    def transport(self) -> Transport:
        """The blocking transport, created on first use.

        Raises:
            ConfigurationError: If the proxy was closed before one was created.
        """
        if self._transport is None:
            with self._transport_lock:
                if self._transport is None:
                    self._require_open()
                    self._transport = HttpxTransport()
        return self._transport

    @property
    def async_transport(self) -> AsyncTransport:
        if self._async_transport is None:
            with self._transport_lock:
                if self._async_transport is None:
                    self._require_open()
                    self._async_transport = HttpxAsyncTransport()
        return self._async_transport

    def _require_open(self) -> None:
        if self._closed:
            raise ConfigurationError("Proxy is closed")

    def new_call(self) -> Call:
        """Create a NEW call against this proxy."""
        return Call(self)

    create_call = new_call

    def close(self) -> None:
        """Close the blocking transport if the proxy created it."""
        self._closed = True
        if self._owns_transport and self._transport is not None:
            self._transport.close()
            self._transport = None

    async def aclose(self) -> None:
        """Close both transports the proxy created."""
        self._closed = True
        if self._owns_async_transport and self._async_transport is not None:
            await self._async_transport.aclose()
            self._async_transport = None
        self.close()

    def __enter__(self) -> "Proxy":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    async def __aenter__(self) -> "Proxy":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"<Proxy {self._url_format!r} signer={self._signer.kind.value}>"


def new_proxy(
    consumer_key: Optional[str] = None,
    consumer_secret: Optional[str] = None,
    token: Optional[str] = None,
    *,
    base_url: str,
    signer_kind: SignerKind | str = SignerKind.NONE,
    token_secret: Optional[str] = None,
    binding_required: bool = False,
    user_agent: Optional[str] = None,
    transport: Optional[Transport] = None,
    async_transport: Optional[AsyncTransport] = None,
) -> Proxy:
    """Build a proxy for ``base_url`` signing with ``signer_kind``.

    Args:
        consumer_key: Application key. Required unless ``signer_kind`` is NONE.
        consumer_secret: Application secret. Required unless NONE.
        token: Request or access token, if already known.
        base_url: Service URL, or a ``str.format`` template when
            ``binding_required`` is set.
        signer_kind: Authentication scheme applied to every call.
        token_secret: Secret paired with ``token`` (OAuth).
        binding_required: Whether ``base_url`` must be bound first.
        user_agent: User-Agent header. Defaults to ``settings.USER_AGENT``.
        transport: Blocking transport to borrow.
        async_transport: Async transport to borrow.

    Returns:
        The new proxy.

    Raises:
        ConfigurationError: If the consumer key or secret is missing or
            empty for a signer that needs them, or the kind is unknown.
    """
    signer = create_signer(signer_kind)

    credentials: Optional[Credentials] = None
    if signer.kind in SIGNERS_NEEDING_CREDENTIALS or consumer_key or consumer_secret:
        if not consumer_key or not consumer_secret:
            raise ConfigurationError("Both a consumer key and a consumer secret are required")
        try:
            credentials = Credentials(
                consumer_key=consumer_key,
                consumer_secret=consumer_secret,
                token=token,
                token_secret=token_secret,
            )
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid credentials: {exc}") from exc

    return Proxy(
        base_url,
        signer=signer,
        credentials=credentials,
        binding_required=binding_required,
        user_agent=user_agent,
        transport=transport,
        async_transport=async_transport,
    )


def flickr_proxy_new(
    consumer_key: str,
    consumer_secret: str,
    token: Optional[str] = None,
    **kwargs,
) -> Proxy:
    """Proxy for the Flickr REST endpoint, signing with ``api_sig``."""
    return new_proxy(
        consumer_key,
        consumer_secret,
        token,
        base_url=settings.FLICKR_REST_URL,
        signer_kind=SignerKind.FLICKR,
        **kwargs,
    )


def oauth_proxy_new(
    consumer_key: str,
    consumer_secret: str,
    url_format: str,
    binding_required: bool = False,
    token: Optional[str] = None,
    token_secret: Optional[str] = None,
    **kwargs,
) -> Proxy:
    """Proxy for an OAuth 1.0 service, signing with PLAINTEXT."""
    return new_proxy(
        consumer_key,
        consumer_secret,
        token,
        base_url=url_format,
        signer_kind=SignerKind.OAUTH_PLAINTEXT,
        token_secret=token_secret,
        binding_required=binding_required,
        **kwargs,
    )
