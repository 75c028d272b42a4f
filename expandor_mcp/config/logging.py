"""Logging configuration."""

from __future__ import annotations

ENV_ENABLE_LOGGING = "ENABLE_LOGGING"
ENV_LOG_LEVEL = "LOG_LEVEL"

DEFAULT_ENABLE_LOGGING = False
DEFAULT_LOG_LEVEL = "INFO"

# Level used while verbose logging is off; failures still reach stderr.
QUIET_LOG_LEVEL = "WARNING"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

__all__ = [
    "ENV_ENABLE_LOGGING",
    "ENV_LOG_LEVEL",
    "DEFAULT_ENABLE_LOGGING",
    "DEFAULT_LOG_LEVEL",
    "QUIET_LOG_LEVEL",
    "LOG_FORMAT",
]
