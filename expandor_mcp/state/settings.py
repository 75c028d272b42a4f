"""Runtime settings (dataclasses only)."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WebSocketSettings:
    host: str
    port: int


@dataclass(frozen=True, slots=True)
class TimeoutSettings:
    peer_connect_timeout_s: float
    peer_poll_interval_s: float
    round_trip_timeout_s: float
    peer_grace_s: float


@dataclass(frozen=True, slots=True)
class LoggingSettings:
    enabled: bool
    level: str


@dataclass(frozen=True, slots=True)
class AppSettings:
    websocket: WebSocketSettings
    timeouts: TimeoutSettings
    logging: LoggingSettings


__all__ = [
    "AppSettings",
    "LoggingSettings",
    "TimeoutSettings",
    "WebSocketSettings",
]
