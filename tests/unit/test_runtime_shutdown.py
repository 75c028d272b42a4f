from __future__ import annotations

import pytest

from utils.fakes import FakeWebSocket, make_settings
from expandor_mcp.config.websocket import WS_CLOSE_GOING_AWAY_CODE, WS_CLOSE_SHUTDOWN_REASON
from expandor_mcp.runtime.dependencies import build_runtime_deps


@pytest.mark.asyncio
async def test_shutdown_abandons_pending_and_closes_peer() -> None:
    deps = build_runtime_deps(make_settings())
    ws = FakeWebSocket()
    await deps.peers.attach(ws)
    futures = [deps.registry.register("r1"), deps.registry.register("r2")]

    await deps.shutdown()

    assert len(deps.registry) == 0
    assert all(f.cancelled() for f in futures)
    assert not deps.peers.is_attached
    assert ws.close_code == WS_CLOSE_GOING_AWAY_CODE
    assert ws.close_reason == WS_CLOSE_SHUTDOWN_REASON


@pytest.mark.asyncio
async def test_shutdown_without_peer_is_quiet() -> None:
    deps = build_runtime_deps(make_settings())
    await deps.shutdown()
    assert len(deps.registry) == 0
