"""Runtime dependency construction (registry, peer slot, dispatcher, host adapter)."""

from __future__ import annotations

import logging

from expandor_mcp.state import RuntimeDeps
from expandor_mcp.host.notifier import HostNotifier
from expandor_mcp.state.settings import AppSettings
from expandor_mcp.bridge.upstream import UpstreamAdapter
from expandor_mcp.bridge.registry import RoundTripRegistry
from expandor_mcp.bridge.dispatcher import RequestDispatcher
from expandor_mcp.handlers.connections import PeerConnectionManager

from .settings_loader import load_settings

logger = logging.getLogger(__name__)


def build_runtime_deps(settings: AppSettings | None = None) -> RuntimeDeps:
    settings = settings or load_settings()

    notifier = HostNotifier()
    registry = RoundTripRegistry()
    peers = PeerConnectionManager(
        registry=registry,
        on_capabilities_changed=notifier.notify_capabilities_changed,
        poll_interval_s=settings.timeouts.peer_poll_interval_s,
    )
    dispatcher = RequestDispatcher(
        peers=peers,
        registry=registry,
        timeout_s=settings.timeouts.round_trip_timeout_s,
    )
    upstream = UpstreamAdapter(
        peers=peers,
        dispatcher=dispatcher,
        grace_s=settings.timeouts.peer_grace_s,
    )

    return RuntimeDeps(
        settings=settings,
        registry=registry,
        peers=peers,
        dispatcher=dispatcher,
        upstream=upstream,
        notifier=notifier,
    )


__all__ = ["RuntimeDeps", "build_runtime_deps"]
