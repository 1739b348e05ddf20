"""Signer for APIs that need no authentication."""

from typing import TYPE_CHECKING, Optional

from restproxy.core.config import SignerKind
from restproxy.domains.credentials.types import Credentials

if TYPE_CHECKING:
    from restproxy.domains.proxy.call import Call


class NoneSigner:
    """Leaves the call untouched."""

    kind = SignerKind.NONE

    def sign(self, call: "Call", credentials: Optional[Credentials]) -> None:
        return None
