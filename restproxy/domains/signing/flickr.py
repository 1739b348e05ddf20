"""Flickr signed-query scheme.

Flickr authenticates a request with ``api_sig``: the MD5 of the shared
secret followed by every parameter name and value, sorted by name. See
http://www.flickr.com/services/api/auth.spec.html section 8.
"""

import hashlib
from typing import TYPE_CHECKING, Mapping, Optional

from restproxy.core.config import SignerKind
from restproxy.core.exceptions import ConfigurationError, InvalidArgumentError
from restproxy.domains.credentials.types import Credentials

if TYPE_CHECKING:
    from restproxy.domains.proxy.call import Call

API_SIG = "api_sig"


def flickr_sign(secret: Optional[str], params: Optional[Mapping[str, str]]) -> str:
    """Compute ``api_sig`` for ``params``.

    Keys are ordered by their UTF-8 bytes, so the result does not depend on
    the order the parameters were added in.

    Args:
        secret: The consumer (shared) secret.
        params: Every parameter that will be sent, ``api_sig`` excluded.

    Returns:
        Lowercase hexadecimal MD5 digest.

    Raises:
        InvalidArgumentError: If ``secret`` or ``params`` is None.
    """
    if secret is None:
        raise InvalidArgumentError("secret")
    if params is None:
        raise InvalidArgumentError("params")

    parts = [secret]
    for key in sorted(params, key=lambda k: k.encode("utf-8")):
        parts.append(f"{key}{params[key]}")

    return hashlib.md5("".join(parts).encode("utf-8")).hexdigest()


class FlickrSigner:
    """Signs calls the way Flickr's REST endpoint expects.

    Every Flickr method goes through the same URL, so the call's function
    becomes the ``method`` parameter and the function is cleared. ``api_key``
    and, once logged in, ``auth_token`` are added before signing.
    """

    kind = SignerKind.FLICKR

    def sign(self, call: "Call", credentials: Optional[Credentials]) -> None:
        if credentials is None:
            raise ConfigurationError("Flickr signing needs a consumer key and secret")

        if call.function:
            call.set_param("method", call.function)
            call.set_function(None)

        call.set_param("api_key", credentials.consumer_key)
        if credentials.has_token:
            call.set_param("auth_token", credentials.token)

        call.remove_param(API_SIG)
        call.set_param(API_SIG, flickr_sign(credentials.consumer_secret, call.params))
