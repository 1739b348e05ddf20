"""Settings loaded from the environment.

Uses Pydantic Settings for automatic env var loading. Every variable takes
the ``RESTPROXY_`` prefix:

    RESTPROXY_TIMEOUT_SECONDS=10
    RESTPROXY_LOG_LEVEL=DEBUG
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from restproxy import __version__


class Settings(BaseSettings):
    """Process-wide defaults for proxies and transports."""

    model_config = SettingsConfigDict(env_prefix="RESTPROXY_", extra="ignore")

    TIMEOUT_SECONDS: float = Field(
        30.0, gt=0, description="Per-request timeout for the default HTTP transport"
    )
    USER_AGENT: str = Field(
        f"restproxy/{__version__}", description="User-Agent header sent with every call"
    )
    FLICKR_REST_URL: str = Field(
        "http://api.flickr.com/services/rest/", description="Flickr REST endpoint"
    )
    FLICKR_AUTH_URL: str = Field(
        "http://api.flickr.com/services/auth/", description="Flickr login page base URL"
    )
    TRUST_ENV: bool = Field(
        True, description="Let the default HTTP transport read proxy settings from the environment"
    )
    LOG_LEVEL: str = Field("INFO", description="Level of the restproxy logger")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Reject level names the logging module does not know."""
        if v.upper() not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}:
            raise ValueError(f"Unknown log level: {v}")
        return v.upper()
