"""Logging initialization."""

from __future__ import annotations

import sys
import logging

from expandor_mcp.state.settings import LoggingSettings
from expandor_mcp.config.logging import LOG_FORMAT, QUIET_LOG_LEVEL


def configure_logging(settings: LoggingSettings) -> None:
    level = settings.level if settings.enabled else QUIET_LOG_LEVEL
    # stdout carries the MCP stream; logs must stay on stderr.
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)
    if not settings.enabled:
        logging.getLogger("uvicorn").setLevel(logging.WARNING)
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("mcp").setLevel(logging.WARNING)


__all__ = ["configure_logging"]
