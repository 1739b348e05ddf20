"""Value types for the proxy domain.

These live in a separate module to avoid circular imports between the
proxy, the call and the signers.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CallState(str, Enum):
    """Lifecycle of a call.

    NEW -> PREPARED -> IN_FLIGHT -> DONE | FAILED. There is no way back.
    """

    NEW = "new"
    """Function, method, params and headers may be changed."""

    PREPARED = "prepared"
    """Signed; the request is frozen."""

    IN_FLIGHT = "in_flight"
    """The transport is sending the request."""

    DONE = "done"
    """An HTTP response arrived, whatever its status."""

    FAILED = "failed"
    """No HTTP response; the transport error or interruption is on the call."""


class OAuthTokenResponse(BaseModel):
    """Token pair a provider granted, already stored on the proxy.

    Anything else in the form-encoded answer (``oauth_callback_confirmed``,
    ``user_nsid`` and the like) lands in ``additional_params``.
    """

    model_config = ConfigDict(frozen=True)

    oauth_token: str = Field(..., min_length=1)
    oauth_token_secret: str = Field(..., repr=False)
    additional_params: dict[str, str] = Field(default_factory=dict)
