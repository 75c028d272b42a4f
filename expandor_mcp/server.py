"""Peer-facing FastAPI server, run side by side with the MCP stdio server."""

from __future__ import annotations

import asyncio
import logging
import contextlib

import uvicorn
from fastapi import FastAPI, WebSocket
from fastapi.responses import ORJSONResponse

from expandor_mcp.state import RuntimeDeps
from expandor_mcp.errors import PeerConnectTimeoutError
from expandor_mcp.state.settings import AppSettings
from expandor_mcp.config.websocket import WS_ENDPOINT_PATH
from expandor_mcp.runtime.dependencies import build_runtime_deps
from expandor_mcp.host.server import build_mcp_server, run_stdio_server
from expandor_mcp.handlers.websocket.manager import handle_peer_connection

logger = logging.getLogger(__name__)

UVICORN_GRACEFUL_SHUTDOWN_S = 5


def create_app(runtime_deps: RuntimeDeps) -> FastAPI:
    app = FastAPI(default_response_class=ORJSONResponse)
    app.state.runtime_deps = runtime_deps

    def _health() -> dict[str, object]:
        return {
            "status": "ok",
            "peer": runtime_deps.peers.state.value,
            "pending": len(runtime_deps.registry),
            "oldest_pending_s": round(runtime_deps.registry.oldest_age_s(), 3),
            "attached_for_s": runtime_deps.peers.attached_for_s(),
        }

    @app.get("/health")
    async def health() -> dict[str, object]:
        return _health()

    @app.get("/healthz")
    async def healthz() -> dict[str, object]:
        return _health()

    @app.websocket(WS_ENDPOINT_PATH)
    async def peer_endpoint(websocket: WebSocket) -> None:
        await handle_peer_connection(websocket, runtime_deps)

    return app


async def _report_first_attachment(runtime_deps: RuntimeDeps) -> None:
    try:
        await runtime_deps.peers.wait_for_attachment(runtime_deps.settings.timeouts.peer_connect_timeout_s)
    except PeerConnectTimeoutError as exc:
        logger.warning("%s; answering host requests with fallbacks until a client connects", exc)
        return
    logger.info("Connected to client")


async def serve(settings: AppSettings) -> None:
    runtime_deps = build_runtime_deps(settings)
    app = create_app(runtime_deps)
    ws_server = uvicorn.Server(
        uvicorn.Config(
            app,
            host=settings.websocket.host,
            port=settings.websocket.port,
            lifespan="off",
            log_config=None,
            timeout_graceful_shutdown=UVICORN_GRACEFUL_SHUTDOWN_S,
        )
    )
    mcp_server = build_mcp_server(runtime_deps.upstream, runtime_deps.notifier)

    ws_task = asyncio.create_task(ws_server.serve(), name="peer-websocket")
    mcp_task = asyncio.create_task(run_stdio_server(mcp_server), name="mcp-stdio")
    watch_task = asyncio.create_task(_report_first_attachment(runtime_deps), name="peer-watch")
    logger.info("WebSocket server is running on ws://%s:%s", settings.websocket.host, settings.websocket.port)

    try:
        done, _pending = await asyncio.wait({ws_task, mcp_task}, return_when=asyncio.FIRST_COMPLETED)
        for task in done:
            if not task.cancelled() and task.exception() is not None:
                logger.error("%s stopped with an error", task.get_name(), exc_info=task.exception())
    finally:
        watch_task.cancel()
        await runtime_deps.shutdown()
        ws_server.should_exit = True
        mcp_task.cancel()
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await ws_task
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await mcp_task
        logger.info("Server closed")


__all__ = ["create_app", "serve"]
