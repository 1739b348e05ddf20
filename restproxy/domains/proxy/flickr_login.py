"""Flickr desktop-app login.

A frob obtained from ``flickr.auth.getFrob`` is sent to the user's browser
inside a signed login URL; after the user approves, ``flickr.auth.getToken``
trades the frob for a token that goes into ``Proxy.set_token``.
"""

from typing import Optional
from urllib.parse import urlencode

from restproxy.core.config import settings
from restproxy.core.exceptions import ConfigurationError, InvalidArgumentError
from restproxy.domains.proxy.proxy import Proxy
from restproxy.domains.signing.flickr import API_SIG, flickr_sign


def build_login_url(
    proxy: Proxy,
    frob: str,
    perms: str = "read",
    auth_url: Optional[str] = None,
) -> str:
    """Return the URL a user opens to grant ``perms`` to the application.

    The signature covers exactly ``api_key``, ``perms`` and ``frob``.

    Args:
        proxy: A proxy holding the Flickr consumer key and secret.
        frob: Frob from ``flickr.auth.getFrob``.
        perms: Requested permission level.
        auth_url: Login page. Defaults to ``settings.FLICKR_AUTH_URL``.

    Returns:
        ``<auth_url>?api_key=...&perms=...&frob=...&api_sig=...``

    Raises:
        InvalidArgumentError: If ``frob`` or ``perms`` is empty.
        ConfigurationError: If the proxy has no credentials.
    """
    if not frob:
        raise InvalidArgumentError("frob")
    if not perms:
        raise InvalidArgumentError("perms")
    credentials = proxy.credentials
    if credentials is None:
        raise ConfigurationError("Building a login URL needs a consumer key and secret")

    params = {"api_key": credentials.consumer_key, "perms": perms, "frob": frob}
    params[API_SIG] = flickr_sign(credentials.consumer_secret, params)

    return f"{auth_url or settings.FLICKR_AUTH_URL}?{urlencode(params)}"
