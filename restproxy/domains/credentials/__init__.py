"""Credentials domain."""

from restproxy.domains.credentials.types import Credentials

__all__ = ["Credentials"]
