"""Configuration enums for type-safe settings.

These enums inherit from str so they compare equal to their plain values
and serialize cleanly.
"""

from enum import Enum


class SignerKind(str, Enum):
    """Authentication scheme a proxy signs its calls with.

    Chosen once when the proxy is built.
    """

    NONE = "none"
    FLICKR = "flickr"
    OAUTH_PLAINTEXT = "oauth_plaintext"


class HttpMethod(str, Enum):
    """HTTP methods a call may use."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
