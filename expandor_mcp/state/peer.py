"""Peer connection slot state (dataclasses only)."""

from __future__ import annotations

import enum
from typing import Any
from dataclasses import dataclass


class PeerState(enum.Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


@dataclass(frozen=True, slots=True)
class PeerConnection:
    websocket: Any
    attached_at: float


__all__ = ["PeerConnection", "PeerState"]
