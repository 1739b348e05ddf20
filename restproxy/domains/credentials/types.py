"""Credential value types.

Consumer key and secret identify the application and never change once a
proxy exists. The token pair identifies the user and is replaced after a
login exchange.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """Consumer and token credentials owned by a single proxy.

    ``consumer_key`` and ``consumer_secret`` are frozen; assigning to them
    raises a ``ValidationError``. ``token`` and ``token_secret`` may be
    reassigned, but not concurrently with calls being prepared on the same
    proxy: callers that rotate tokens while other threads are issuing calls
    must hold their own lock around the rotation.
    """

    model_config = ConfigDict(validate_assignment=True)

    consumer_key: str = Field(..., min_length=1, frozen=True)
    consumer_secret: str = Field(..., min_length=1, frozen=True, repr=False)
    token: Optional[str] = None
    token_secret: Optional[str] = Field(None, repr=False)

    @property
    def has_token(self) -> bool:
        """True when a (non-empty) token is set."""
        return bool(self.token)
