"""Peer message parsing/validation for the bridge envelope."""

from __future__ import annotations

from typing import Any

import orjson

from expandor_mcp.config.protocol import PEER_MSG_PING, PEER_MSG_ROUND_TRIP, PEER_MSG_CLIENT_CONNECTED
from expandor_mcp.config.websocket import WS_KEY_ID, WS_KEY_DATA, WS_KEY_TYPE, WS_KEY_ERROR, WS_KEY_SUCCESS
from expandor_mcp.state.messages import (
    PeerMessage,
    PingMessage,
    RoundTripReply,
    UnknownMessage,
    ClientConnectedMessage,
)


def _parse_round_trip(msg: dict[str, Any]) -> RoundTripReply:
    request_id = msg.get(WS_KEY_ID)
    if not isinstance(request_id, str) or not request_id.strip():
        raise ValueError("round_trip message missing non-empty 'id'")

    success = msg.get(WS_KEY_SUCCESS)
    if not isinstance(success, bool):
        raise ValueError("round_trip message 'success' must be a boolean")

    return RoundTripReply(
        request_id=request_id.strip(),
        success=success,
        data=msg.get(WS_KEY_DATA),
        error=msg.get(WS_KEY_ERROR),
    )


def parse_peer_message(raw: str | bytes) -> PeerMessage:
    try:
        msg = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON: {exc}") from exc

    if not isinstance(msg, dict):
        raise ValueError("message must be a JSON object")

    msg_type = msg.get(WS_KEY_TYPE)
    if not isinstance(msg_type, str) or not msg_type.strip():
        raise ValueError("message missing non-empty 'type'")
    msg_type = msg_type.strip()

    if msg_type == PEER_MSG_PING:
        return PingMessage()
    if msg_type == PEER_MSG_CLIENT_CONNECTED:
        return ClientConnectedMessage()
    if msg_type == PEER_MSG_ROUND_TRIP:
        return _parse_round_trip(msg)
    return UnknownMessage(msg_type=msg_type, raw=msg)


__all__ = ["parse_peer_message"]
