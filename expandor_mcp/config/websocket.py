"""Peer WebSocket configuration and constants."""

from __future__ import annotations

ENV_WS_HOST = "WS_HOST"
ENV_WS_PORT = "WS_PORT"

DEFAULT_WS_HOST = "localhost"
DEFAULT_WS_PORT = 8742

WS_ENDPOINT_PATH = "/"

# Envelope keys
WS_KEY_ID = "id"
WS_KEY_TYPE = "type"
WS_KEY_PARAMS = "params"
WS_KEY_SUCCESS = "success"
WS_KEY_DATA = "data"
WS_KEY_ERROR = "error"

# Close codes
WS_CLOSE_GOING_AWAY_CODE = 1001
WS_CLOSE_POLICY_VIOLATION_CODE = 1008

WS_CLOSE_ALREADY_CONNECTED_REASON = "Already connected to a client"
WS_CLOSE_SHUTDOWN_REASON = "server shutting down"
WS_CLOSE_SEND_FAILED_REASON = "send failed"

__all__ = [
    "ENV_WS_HOST",
    "ENV_WS_PORT",
    "DEFAULT_WS_HOST",
    "DEFAULT_WS_PORT",
    "WS_ENDPOINT_PATH",
    "WS_KEY_ID",
    "WS_KEY_TYPE",
    "WS_KEY_PARAMS",
    "WS_KEY_SUCCESS",
    "WS_KEY_DATA",
    "WS_KEY_ERROR",
    "WS_CLOSE_GOING_AWAY_CODE",
    "WS_CLOSE_POLICY_VIOLATION_CODE",
    "WS_CLOSE_ALREADY_CONNECTED_REASON",
    "WS_CLOSE_SHUTDOWN_REASON",
    "WS_CLOSE_SEND_FAILED_REASON",
]
