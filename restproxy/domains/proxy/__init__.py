"""Proxy domain: proxies, calls and the login/token helpers built on them."""

from restproxy.domains.proxy.call import Call
from restproxy.domains.proxy.flickr_login import build_login_url
from restproxy.domains.proxy.oauth_exchange import access_token, request_token
from restproxy.domains.proxy.proxy import Proxy, flickr_proxy_new, new_proxy, oauth_proxy_new
from restproxy.domains.proxy.types import CallState, OAuthTokenResponse

__all__ = [
    "Call",
    "CallState",
    "OAuthTokenResponse",
    "Proxy",
    "access_token",
    "build_login_url",
    "flickr_proxy_new",
    "new_proxy",
    "oauth_proxy_new",
    "request_token",
]
