"""Configuration module exports (env names and defaults only)."""

from .server import SERVER_NAME, SERVER_VERSION
from .websocket import DEFAULT_WS_HOST, DEFAULT_WS_PORT, WS_ENDPOINT_PATH

__all__ = [
    "DEFAULT_WS_HOST",
    "DEFAULT_WS_PORT",
    "SERVER_NAME",
    "SERVER_VERSION",
    "WS_ENDPOINT_PATH",
]
