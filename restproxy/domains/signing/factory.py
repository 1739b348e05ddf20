"""Signer selection by kind."""

from restproxy.core.config import SignerKind
from restproxy.core.exceptions import ConfigurationError
from restproxy.domains.signing.flickr import FlickrSigner
from restproxy.domains.signing.none import NoneSigner
from restproxy.domains.signing.oauth_plaintext import OAuthPlaintextSigner
from restproxy.domains.signing.protocols import Signer

SIGNERS_NEEDING_CREDENTIALS = frozenset({SignerKind.FLICKR, SignerKind.OAUTH_PLAINTEXT})


def create_signer(kind: SignerKind | str) -> Signer:
    """Return a fresh signer for ``kind``.

    Raises:
        ConfigurationError: If ``kind`` names no known scheme.
    """
    try:
        kind = SignerKind(kind)
    except ValueError as exc:
        raise ConfigurationError(f"Unknown signer kind: {kind!r}") from exc

    if kind == SignerKind.FLICKR:
        return FlickrSigner()
    if kind == SignerKind.OAUTH_PLAINTEXT:
        return OAuthPlaintextSigner()
    return NoneSigner()
