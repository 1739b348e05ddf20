"""OAuth 1.0 PLAINTEXT signing.

PLAINTEXT sends the secrets themselves as the signature, so it is only as
safe as the transport: use it over TLS.

Reference: RFC 5849 section 3.4.4.
"""

import secrets
import time
from typing import TYPE_CHECKING, Callable, Optional

from restproxy.core.config import SignerKind
from restproxy.core.exceptions import ConfigurationError, InvalidArgumentError
from restproxy.domains.credentials.types import Credentials

if TYPE_CHECKING:
    from restproxy.domains.proxy.call import Call

OAUTH_VERSION = "1.0"
SIGNATURE_METHOD = "PLAINTEXT"


def sign_plaintext(consumer_secret: Optional[str], token_secret: Optional[str] = None) -> str:
    """Return the PLAINTEXT signature ``consumer_secret&token_secret``.

    A missing token secret leaves the part after ``&`` empty.
    """
    if consumer_secret is None:
        raise InvalidArgumentError("consumer_secret")
    return f"{consumer_secret}&{token_secret or ''}"


def _timestamp() -> str:
    return str(int(time.time()))


def _nonce() -> str:
    return str(secrets.randbits(32))


class OAuthPlaintextSigner:
    """Adds the OAuth protocol parameters to a call.

    Clock and nonce source are injectable so tests can pin both.
    """

    kind = SignerKind.OAUTH_PLAINTEXT

    def __init__(
        self,
        timestamp_factory: Callable[[], str] = _timestamp,
        nonce_factory: Callable[[], str] = _nonce,
    ) -> None:
        """Create the signer.

        Args:
            timestamp_factory: Returns the current Unix time in seconds as a
                decimal string.
            nonce_factory: Returns a fresh nonce per call.
        """
        self._timestamp_factory = timestamp_factory
        self._nonce_factory = nonce_factory

    def sign(self, call: "Call", credentials: Optional[Credentials]) -> None:
        if credentials is None:
            raise ConfigurationError("OAuth signing needs a consumer key and secret")

        call.set_param("oauth_version", OAUTH_VERSION)
        call.set_param("oauth_timestamp", self._timestamp_factory())
        call.set_param("oauth_nonce", self._nonce_factory())
        call.set_param("oauth_consumer_key", credentials.consumer_key)

        if credentials.has_token:
            call.set_param("oauth_token", credentials.token)
        else:
            call.remove_param("oauth_token")

        call.set_param("oauth_signature_method", SIGNATURE_METHOD)
        call.set_param(
            "oauth_signature",
            sign_plaintext(credentials.consumer_secret, credentials.token_secret),
        )
