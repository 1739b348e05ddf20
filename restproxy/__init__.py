"""Signed REST calls against third-party HTTP APIs.

Usage::

    from restproxy import flickr_proxy_new

    with flickr_proxy_new(API_KEY, SECRET) as proxy:
        call = proxy.new_call()
        call.set_function("flickr.test.echo")
        call.sync()
        print(call.status_code, call.text)
"""

__version__ = "0.1.0"

from restproxy.core.config import HttpMethod, SignerKind, settings  # noqa: E402
from restproxy.core.exceptions import (  # noqa: E402
    CallStateError,
    ConfigurationError,
    InvalidArgumentError,
    ProtocolError,
    RestProxyException,
    TransportError,
)
from restproxy.domains.credentials import Credentials  # noqa: E402
from restproxy.domains.proxy import (  # noqa: E402
    Call,
    CallState,
    OAuthTokenResponse,
    Proxy,
    access_token,
    build_login_url,
    flickr_proxy_new,
    new_proxy,
    oauth_proxy_new,
    request_token,
)
from restproxy.domains.signing import flickr_sign, sign_plaintext  # noqa: E402

__all__ = [
    "Call",
    "CallState",
    "CallStateError",
    "ConfigurationError",
    "Credentials",
    "HttpMethod",
    "InvalidArgumentError",
    "OAuthTokenResponse",
    "ProtocolError",
    "Proxy",
    "RestProxyException",
    "SignerKind",
    "TransportError",
    "access_token",
    "build_login_url",
    "flickr_proxy_new",
    "flickr_sign",
    "new_proxy",
    "oauth_proxy_new",
    "request_token",
    "settings",
    "sign_plaintext",
]
