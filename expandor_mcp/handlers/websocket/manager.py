"""Peer WebSocket connection handler orchestration."""

from __future__ import annotations

import logging
import contextlib

from fastapi import WebSocket, WebSocketDisconnect

from expandor_mcp.state import RuntimeDeps
from expandor_mcp.config.websocket import WS_CLOSE_POLICY_VIOLATION_CODE, WS_CLOSE_ALREADY_CONNECTED_REASON

from .errors import reject_connection
from .message_loop import run_message_loop

logger = logging.getLogger(__name__)


async def handle_peer_connection(ws: WebSocket, runtime_deps: RuntimeDeps) -> None:
    peers = runtime_deps.peers
    # Admission happens after accept; a refused peer gets an explicit close frame.
    await ws.accept()
    logger.info("Client connected")
    if not await peers.attach(ws):
        await reject_connection(
            ws,
            close_code=WS_CLOSE_POLICY_VIOLATION_CODE,
            reason=WS_CLOSE_ALREADY_CONNECTED_REASON,
        )
        return

    try:
        await run_message_loop(ws, peers)
    except WebSocketDisconnect as exc:
        logger.info("Client disconnected code=%s", exc.code)
    except Exception:
        logger.exception("WebSocket error")
        with contextlib.suppress(Exception):
            await ws.close()
    finally:
        await peers.detach(ws)


__all__ = ["handle_peer_connection"]
