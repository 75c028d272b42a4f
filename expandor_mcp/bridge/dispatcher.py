"""Outbound round trips: send one request to the peer and await its reply."""

from __future__ import annotations

import secrets
import asyncio
import logging
from typing import TYPE_CHECKING, Any

from expandor_mcp.errors import RoundTripTimeoutError
from expandor_mcp.config.protocol import REQUEST_ID_LENGTH
from expandor_mcp.config.timeouts import DEFAULT_ROUND_TRIP_TIMEOUT_S
from expandor_mcp.handlers.websocket.errors import build_request_envelope

from .registry import RoundTripRegistry

if TYPE_CHECKING:
    from expandor_mcp.handlers.connections import PeerConnectionManager

logger = logging.getLogger(__name__)

_ID_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz_-"


def new_request_id(length: int = REQUEST_ID_LENGTH) -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


class RequestDispatcher:
    def __init__(
        self,
        *,
        peers: PeerConnectionManager,
        registry: RoundTripRegistry,
        timeout_s: float | None = None,
    ) -> None:
        self._peers = peers
        self._registry = registry
        self._timeout_s = float(DEFAULT_ROUND_TRIP_TIMEOUT_S if timeout_s is None else timeout_s)

    def _fresh_request_id(self) -> str:
        request_id = new_request_id()
        while request_id in self._registry:
            request_id = new_request_id()
        return request_id

    async def call(self, msg_type: str, params: dict[str, Any] | None = None, *, timeout_s: float | None = None) -> Any:
        """Forward one request to the peer and return the data of its reply.

        Raises NoPeerError when nothing is attached, RoundTripTimeoutError when
        the peer stays silent, and PeerReportedError when it answers with
        success=false. The registry entry is gone once this returns or raises.
        """
        timeout = self._timeout_s if timeout_s is None else float(timeout_s)
        request_id = self._fresh_request_id()
        settled = self._registry.register(request_id)
        try:
            await self._peers.dispatch(build_request_envelope(request_id, msg_type, params))
            logger.debug("round trip %s: sent %s", request_id, msg_type)
            try:
                return await asyncio.wait_for(settled, timeout=timeout)
            except TimeoutError:
                logger.warning("round trip %s: no reply to %s within %.1fs", request_id, msg_type, timeout)
                raise RoundTripTimeoutError(request_id, timeout) from None
        finally:
            self._registry.abandon(request_id)


__all__ = ["RequestDispatcher", "new_request_id"]
