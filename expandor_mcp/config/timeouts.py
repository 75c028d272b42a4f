"""Wait bounds for peer attachment and round trips (env names and defaults only)."""

from __future__ import annotations

ENV_PEER_CONNECT_TIMEOUT_S = "PEER_CONNECT_TIMEOUT_S"
ENV_PEER_POLL_INTERVAL_S = "PEER_POLL_INTERVAL_S"
ENV_ROUND_TRIP_TIMEOUT_S = "ROUND_TRIP_TIMEOUT_S"
ENV_PEER_GRACE_S = "PEER_GRACE_S"

DEFAULT_PEER_CONNECT_TIMEOUT_S = 30.0
DEFAULT_PEER_POLL_INTERVAL_S = 0.5
DEFAULT_ROUND_TRIP_TIMEOUT_S = 30.0

# 0 disables the grace window: host requests fall back as soon as no peer is attached.
DEFAULT_PEER_GRACE_S = 0.0

__all__ = [
    "ENV_PEER_CONNECT_TIMEOUT_S",
    "ENV_PEER_POLL_INTERVAL_S",
    "ENV_ROUND_TRIP_TIMEOUT_S",
    "ENV_PEER_GRACE_S",
    "DEFAULT_PEER_CONNECT_TIMEOUT_S",
    "DEFAULT_PEER_POLL_INTERVAL_S",
    "DEFAULT_ROUND_TRIP_TIMEOUT_S",
    "DEFAULT_PEER_GRACE_S",
]
