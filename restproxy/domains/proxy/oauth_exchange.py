"""OAuth 1.0 token exchange over a PLAINTEXT proxy.

Covers the two server round-trips of the 3-legged flow:
1. Obtain temporary credentials (request token)
2. (user authorizes in a browser)
3. Exchange them for an access token

Each step stores the returned token pair on the proxy, so calls prepared
afterwards use it. That is a token rotation: do not run these while other
threads prepare calls on the same proxy.

Reference: RFC 5849 - The OAuth 1.0 Protocol
"""

from typing import Optional
from urllib.parse import parse_qsl

from restproxy.core.config import HttpMethod, SignerKind
from restproxy.core.exceptions import ConfigurationError, ProtocolError
from restproxy.core.logging import logger
from restproxy.domains.proxy.proxy import Proxy
from restproxy.domains.proxy.types import OAuthTokenResponse

oauth_logger = logger.with_prefix("OAuth: ")


def _exchange(proxy: Proxy, function: str, extra_params: dict[str, str]) -> OAuthTokenResponse:
    if proxy.signer.kind != SignerKind.OAUTH_PLAINTEXT:
        raise ConfigurationError("Token exchange needs an OAuth proxy")

    call = proxy.new_call()
    call.set_function(function)
    call.set_method(HttpMethod.POST)
    call.set_params(extra_params)
    call.sync()

    if not call.ok:
        oauth_logger.error(f"Token endpoint '{function}' answered {call.status_code}")
        raise ProtocolError(
            call.status_code, call.text, f"Failed to obtain token from '{function}'"
        )

    response_params = dict(parse_qsl(call.text, keep_blank_values=True))
    if not response_params.get("oauth_token") or "oauth_token_secret" not in response_params:
        oauth_logger.error(f"Invalid response from token endpoint '{function}'")
        raise ProtocolError(call.status_code, call.text, "Invalid response from OAuth provider")

    proxy.set_token(response_params["oauth_token"])
    proxy.set_token_secret(response_params["oauth_token_secret"])
    oauth_logger.info(f"Stored token from '{function}'")

    return OAuthTokenResponse(
        oauth_token=response_params.pop("oauth_token"),
        oauth_token_secret=response_params.pop("oauth_token_secret"),
        additional_params=response_params,
    )


def request_token(
    proxy: Proxy,
    function: str = "request_token",
    callback_uri: Optional[str] = None,
) -> OAuthTokenResponse:
    """Obtain temporary credentials and store them on ``proxy``.

    Args:
        proxy: OAuth PLAINTEXT proxy with consumer credentials.
        function: Request-token endpoint, relative to the proxy URL.
        callback_uri: Sent as ``oauth_callback`` when given.

    Raises:
        ProtocolError: If the endpoint answers non-2xx or omits the token pair.
        TransportError: If the endpoint cannot be reached.
    """
    extra = {"oauth_callback": callback_uri} if callback_uri else {}
    return _exchange(proxy, function, extra)


def access_token(
    proxy: Proxy,
    function: str = "access_token",
    verifier: Optional[str] = None,
) -> OAuthTokenResponse:
    """Exchange the stored request token for an access token.

    Args:
        proxy: Proxy holding the request token from :func:`request_token`.
        function: Access-token endpoint, relative to the proxy URL.
        verifier: Sent as ``oauth_verifier`` when given.

    Raises:
        ProtocolError: If the endpoint answers non-2xx or omits the token pair.
        TransportError: If the endpoint cannot be reached.
    """
    extra = {"oauth_verifier": verifier} if verifier else {}
    return _exchange(proxy, function, extra)
