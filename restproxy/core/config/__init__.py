"""Configuration module for restproxy.

Usage:
    from restproxy.core.config import settings, SignerKind

    timeout = settings.TIMEOUT_SECONDS
"""

from restproxy.core.config.enums import HttpMethod, SignerKind
from restproxy.core.config.settings import Settings

__all__ = [
    "HttpMethod",
    "Settings",
    "SignerKind",
    "settings",
]

# Singleton settings instance
settings = Settings()
