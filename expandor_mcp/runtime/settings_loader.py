"""Environment parsing for runtime settings."""

from __future__ import annotations

import os

from expandor_mcp.state.settings import AppSettings, LoggingSettings, TimeoutSettings, WebSocketSettings
from expandor_mcp.config.websocket import ENV_WS_HOST, ENV_WS_PORT, DEFAULT_WS_HOST, DEFAULT_WS_PORT
from expandor_mcp.config.logging import (
    ENV_LOG_LEVEL,
    DEFAULT_LOG_LEVEL,
    ENV_ENABLE_LOGGING,
    DEFAULT_ENABLE_LOGGING,
)
from expandor_mcp.config.timeouts import (
    ENV_PEER_GRACE_S,
    DEFAULT_PEER_GRACE_S,
    ENV_PEER_POLL_INTERVAL_S,
    ENV_ROUND_TRIP_TIMEOUT_S,
    ENV_PEER_CONNECT_TIMEOUT_S,
    DEFAULT_PEER_POLL_INTERVAL_S,
    DEFAULT_ROUND_TRIP_TIMEOUT_S,
    DEFAULT_PEER_CONNECT_TIMEOUT_S,
)

MIN_PORT = 1
MAX_PORT = 65535


def _str_env(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None:
        return default
    v = raw.strip()
    return v if v else default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except Exception:
        return default


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except Exception:
        return default


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _positive(value: float, default: float) -> float:
    return value if value > 0 else default


def validate_port(port: int, source: str = ENV_WS_PORT) -> int:
    if port < MIN_PORT or port > MAX_PORT:
        raise ValueError(f"{source} must be between {MIN_PORT} and {MAX_PORT}")
    return port


def _load_websocket_settings() -> WebSocketSettings:
    return WebSocketSettings(
        host=_str_env(ENV_WS_HOST, DEFAULT_WS_HOST),
        port=validate_port(_int_env(ENV_WS_PORT, DEFAULT_WS_PORT)),
    )


def _load_timeout_settings() -> TimeoutSettings:
    connect_timeout = _float_env(ENV_PEER_CONNECT_TIMEOUT_S, DEFAULT_PEER_CONNECT_TIMEOUT_S)
    poll_interval = _float_env(ENV_PEER_POLL_INTERVAL_S, DEFAULT_PEER_POLL_INTERVAL_S)
    round_trip_timeout = _float_env(ENV_ROUND_TRIP_TIMEOUT_S, DEFAULT_ROUND_TRIP_TIMEOUT_S)
    grace = _float_env(ENV_PEER_GRACE_S, DEFAULT_PEER_GRACE_S)

    return TimeoutSettings(
        peer_connect_timeout_s=_positive(connect_timeout, DEFAULT_PEER_CONNECT_TIMEOUT_S),
        peer_poll_interval_s=_positive(poll_interval, DEFAULT_PEER_POLL_INTERVAL_S),
        round_trip_timeout_s=_positive(round_trip_timeout, DEFAULT_ROUND_TRIP_TIMEOUT_S),
        peer_grace_s=max(0.0, grace),
    )


def _load_logging_settings() -> LoggingSettings:
    return LoggingSettings(
        enabled=_bool_env(ENV_ENABLE_LOGGING, DEFAULT_ENABLE_LOGGING),
        level=_str_env(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper(),
    )


def load_settings() -> AppSettings:
    return AppSettings(
        websocket=_load_websocket_settings(),
        timeouts=_load_timeout_settings(),
        logging=_load_logging_settings(),
    )


__all__ = ["load_settings", "validate_port"]
