"""Protocols for the signing domain."""

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

from restproxy.core.config import SignerKind
from restproxy.domains.credentials.types import Credentials

if TYPE_CHECKING:
    from restproxy.domains.proxy.call import Call


@runtime_checkable
class Signer(Protocol):
    """Attaches authentication parameters to a call being prepared.

    ``sign`` runs while the call is still NEW, so it may add, overwrite or
    remove parameters and change the function. It must not keep a reference
    to the call.
    """

    kind: SignerKind

    def sign(self, call: "Call", credentials: Optional[Credentials]) -> None:
        """Add this scheme's parameters to ``call``.

        Args:
            call: The call being prepared.
            credentials: The proxy's credentials as of now, or None for an
                unauthenticated proxy.

        Raises:
            ConfigurationError: If the scheme needs credentials and has none.
        """
        ...
