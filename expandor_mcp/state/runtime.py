"""Typed runtime state objects for dependency wiring."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from expandor_mcp.host.notifier import HostNotifier
    from expandor_mcp.state.settings import AppSettings
    from expandor_mcp.bridge.upstream import UpstreamAdapter
    from expandor_mcp.bridge.registry import RoundTripRegistry
    from expandor_mcp.bridge.dispatcher import RequestDispatcher
    from expandor_mcp.handlers.connections import PeerConnectionManager


@dataclass(slots=True)
class RuntimeDeps:
    settings: AppSettings
    registry: RoundTripRegistry
    peers: PeerConnectionManager
    dispatcher: RequestDispatcher
    upstream: UpstreamAdapter
    notifier: HostNotifier

    async def shutdown(self) -> None:
        pending = len(self.registry)
        if pending:
            logger.info("abandoning %s pending round trip(s)", pending)
            logger.debug("abandoned ids: %s", ", ".join(self.registry.pending_ids()))
        self.registry.clear()
        try:
            await self.peers.close()
        except Exception:
            logger.exception("runtime shutdown failed")


__all__ = ["RuntimeDeps"]
