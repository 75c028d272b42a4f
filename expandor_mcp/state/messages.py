"""Inbound peer messages, decoded once at the transport boundary."""

from __future__ import annotations

from typing import Any
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PingMessage:
    pass


@dataclass(frozen=True, slots=True)
class ClientConnectedMessage:
    pass


@dataclass(frozen=True, slots=True)
class RoundTripReply:
    request_id: str
    success: bool
    data: Any = None
    error: Any = None


@dataclass(frozen=True, slots=True)
class UnknownMessage:
    msg_type: str
    raw: dict[str, Any]


PeerMessage = PingMessage | ClientConnectedMessage | RoundTripReply | UnknownMessage

__all__ = [
    "ClientConnectedMessage",
    "PeerMessage",
    "PingMessage",
    "RoundTripReply",
    "UnknownMessage",
]
