"""Logging for restproxy.

A thin layer over the standard library: every module logs through a
``ContextualLogger`` so dimensions such as the call function or signer
kind travel with each record.

Usage::

    from restproxy.core.logging import logger

    call_logger = logger.with_context(function="flickr.test.echo")
    call_logger.debug("Prepared call")
"""

import logging
from typing import Any, MutableMapping, Optional

from restproxy.core.config import settings

LOGGER_NAME = "restproxy"


class ContextualLogger(logging.LoggerAdapter):
    """LoggerAdapter that carries key/value dimensions and an optional prefix.

    Dimensions are attached to each record under ``extra`` and rendered as a
    trailing ``[key=value ...]`` block so plain formatters still show them.
    """

    def __init__(
        self,
        logger: logging.Logger,
        prefix: str = "",
        dimensions: Optional[dict[str, Any]] = None,
    ) -> None:
        """Wrap ``logger`` with a message prefix and context dimensions."""
        super().__init__(logger, dict(dimensions or {}))
        self.prefix = prefix
        self.dimensions: dict[str, Any] = dict(dimensions or {})

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger with ``dimensions`` merged into the current ones."""
        return ContextualLogger(self.logger, self.prefix, {**self.dimensions, **dimensions})

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a new logger whose messages start with ``prefix``."""
        return ContextualLogger(self.logger, prefix, self.dimensions)

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra.update(self.dimensions)
        kwargs["extra"] = extra
        if self.dimensions:
            rendered = " ".join(f"{k}={v}" for k, v in self.dimensions.items())
            msg = f"{self.prefix}{msg} [{rendered}]"
        else:
            msg = f"{self.prefix}{msg}"
        return msg, kwargs


def _configure_base_logger() -> logging.Logger:
    base = logging.getLogger(LOGGER_NAME)
    base.setLevel(settings.LOG_LEVEL.upper())
    if not base.handlers:
        # Applications decide where records go.
        base.addHandler(logging.NullHandler())
    return base


logger = ContextualLogger(_configure_base_logger())
