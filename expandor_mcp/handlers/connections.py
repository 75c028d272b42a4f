"""Single-slot admission control and inbound routing for the peer connection."""

from __future__ import annotations

import time
import asyncio
import logging
import contextlib
from typing import Any
from collections.abc import Callable, Awaitable

from fastapi import WebSocketDisconnect

from expandor_mcp.bridge.registry import RoundTripRegistry
from expandor_mcp.state.peer import PeerState, PeerConnection
from expandor_mcp.config.protocol import PEER_MSG_PONG
from expandor_mcp.config.timeouts import DEFAULT_PEER_POLL_INTERVAL_S
from expandor_mcp.errors import NoPeerError, PeerConnectTimeoutError
from expandor_mcp.config.websocket import (
    WS_KEY_TYPE,
    WS_CLOSE_GOING_AWAY_CODE,
    WS_CLOSE_SHUTDOWN_REASON,
    WS_CLOSE_SEND_FAILED_REASON,
)
from expandor_mcp.state.messages import PingMessage, RoundTripReply, ClientConnectedMessage

from .websocket.parser import parse_peer_message
from .websocket.errors import send_envelope, safe_send_envelope

logger = logging.getLogger(__name__)

NotifyFn = Callable[[], Awaitable[None]]


class PeerConnectionManager:
    """Own the one allowed peer connection.

    The first peer to attach wins; later attempts are refused while it stays
    attached. Replies from the peer are handed to the round-trip registry.
    """

    def __init__(
        self,
        *,
        registry: RoundTripRegistry,
        on_capabilities_changed: NotifyFn | None = None,
        poll_interval_s: float | None = None,
    ) -> None:
        self._registry = registry
        self._on_capabilities_changed = on_capabilities_changed
        self._poll_interval_s = float(
            DEFAULT_PEER_POLL_INTERVAL_S if poll_interval_s is None else poll_interval_s
        )
        self._peer: PeerConnection | None = None
        self._attached = asyncio.Event()

    @property
    def state(self) -> PeerState:
        return PeerState.CONNECTED if self._peer is not None else PeerState.DISCONNECTED

    @property
    def is_attached(self) -> bool:
        return self._peer is not None

    def attached_for_s(self) -> float | None:
        if self._peer is None:
            return None
        return max(0.0, time.monotonic() - self._peer.attached_at)

    async def attach(self, ws: Any) -> bool:
        """Admit ``ws`` as the peer. Returns False if another peer is attached."""
        if self._peer is not None:
            logger.info("Already connected to a client; refusing new peer")
            return False
        self._peer = PeerConnection(websocket=ws, attached_at=time.monotonic())
        self._attached.set()
        logger.info("Peer attached")
        await self._notify_capabilities_changed()
        return True

    async def detach(self, ws: Any) -> None:
        peer = self._peer
        if peer is None or peer.websocket is not ws:
            return
        self._peer = None
        self._attached.clear()
        logger.info("Peer detached; pending round trips: %s", len(self._registry))

    async def wait_for_attachment(self, timeout_s: float) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + float(timeout_s)
        while self._peer is None:
            remaining = deadline - loop.time()
            if remaining <= 0:
                raise PeerConnectTimeoutError(timeout_s)
            try:
                await asyncio.wait_for(self._attached.wait(), timeout=min(self._poll_interval_s, remaining))
            except TimeoutError:
                logger.info("Waiting for peer connection...")
        logger.debug("Peer available")

    async def dispatch(self, envelope: dict[str, Any]) -> None:
        peer = self._peer
        if peer is None:
            raise NoPeerError()
        try:
            await send_envelope(peer.websocket, envelope)
        except WebSocketDisconnect as exc:
            await self._drop(peer, reason=WS_CLOSE_SEND_FAILED_REASON)
            raise NoPeerError("Client connection lost") from exc
        except Exception as exc:
            logger.warning("send to peer failed; detaching", exc_info=True)
            await self._drop(peer, reason=WS_CLOSE_SEND_FAILED_REASON)
            raise NoPeerError("Client connection lost") from exc

    async def handle_message(self, ws: Any, raw: str | bytes) -> None:
        peer = self._peer
        if peer is None or peer.websocket is not ws:
            logger.debug("Dropping frame from a socket that is not the attached peer")
            return

        try:
            msg = parse_peer_message(raw)
        except ValueError as exc:
            logger.warning("Dropping malformed peer message: %s", exc)
            return

        if isinstance(msg, PingMessage):
            await safe_send_envelope(ws, {WS_KEY_TYPE: PEER_MSG_PONG})
            return
        if isinstance(msg, ClientConnectedMessage):
            await self._notify_capabilities_changed()
            return
        if isinstance(msg, RoundTripReply):
            self._registry.settle(msg.request_id, success=msg.success, data=msg.data, error=msg.error)
            return
        logger.info("Dropping unknown peer message type=%s", msg.msg_type)

    async def close(self) -> None:
        peer = self._peer
        if peer is None:
            return
        await self._drop(peer, reason=WS_CLOSE_SHUTDOWN_REASON)

    async def _drop(self, peer: PeerConnection, *, reason: str) -> None:
        await self.detach(peer.websocket)
        with contextlib.suppress(Exception):
            await peer.websocket.close(code=WS_CLOSE_GOING_AWAY_CODE, reason=reason)

    async def _notify_capabilities_changed(self) -> None:
        if self._on_capabilities_changed is None:
            return
        try:
            await self._on_capabilities_changed()
        except Exception:
            logger.exception("host list_changed notification failed")


__all__ = ["NotifyFn", "PeerConnectionManager"]
