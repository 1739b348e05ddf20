"""Signing domain: the authentication schemes a proxy can apply."""

from restproxy.domains.signing.factory import SIGNERS_NEEDING_CREDENTIALS, create_signer
from restproxy.domains.signing.flickr import FlickrSigner, flickr_sign
from restproxy.domains.signing.none import NoneSigner
from restproxy.domains.signing.oauth_plaintext import OAuthPlaintextSigner, sign_plaintext
from restproxy.domains.signing.protocols import Signer

__all__ = [
    "SIGNERS_NEEDING_CREDENTIALS",
    "FlickrSigner",
    "NoneSigner",
    "OAuthPlaintextSigner",
    "Signer",
    "create_signer",
    "flickr_sign",
    "sign_plaintext",
]
