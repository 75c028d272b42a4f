"""Receive loop for the attached peer."""

from __future__ import annotations

import logging

from fastapi import WebSocket, WebSocketDisconnect

from expandor_mcp.handlers.connections import PeerConnectionManager

logger = logging.getLogger(__name__)


async def run_message_loop(ws: WebSocket, peers: PeerConnectionManager) -> None:
    while True:
        message = await ws.receive()
        if message["type"] == "websocket.disconnect":
            raise WebSocketDisconnect(code=message.get("code", 1000), reason=message.get("reason"))
        raw = message.get("text")
        if raw is None:
            raw = message.get("bytes")
        if raw is None:
            continue
        await peers.handle_message(ws, raw)


__all__ = ["run_message_loop"]
