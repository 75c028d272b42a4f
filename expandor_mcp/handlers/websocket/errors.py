"""Send and rejection helpers for the peer WebSocket."""

from __future__ import annotations

import logging
from typing import Any

import orjson
from fastapi import WebSocket, WebSocketDisconnect

from expandor_mcp.config.websocket import WS_KEY_ID, WS_KEY_TYPE, WS_KEY_PARAMS

logger = logging.getLogger(__name__)


def build_request_envelope(request_id: str, msg_type: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
    envelope: dict[str, Any] = {WS_KEY_ID: request_id, WS_KEY_TYPE: msg_type}
    if params is not None:
        envelope[WS_KEY_PARAMS] = params
    return envelope


async def send_envelope(ws: WebSocket, envelope: dict[str, Any]) -> None:
    await ws.send_text(orjson.dumps(envelope).decode("utf-8"))


async def safe_send_envelope(ws: WebSocket, envelope: dict[str, Any]) -> bool:
    try:
        await send_envelope(ws, envelope)
    except WebSocketDisconnect:
        return False
    except Exception:
        logger.debug("WebSocket send failed", exc_info=True)
        return False
    return True


async def reject_connection(ws: WebSocket, *, close_code: int, reason: str) -> None:
    """Close an accepted connection that was refused admission."""
    try:
        await ws.close(code=close_code, reason=reason)
    except Exception:
        return


__all__ = [
    "build_request_envelope",
    "reject_connection",
    "safe_send_envelope",
    "send_envelope",
]
