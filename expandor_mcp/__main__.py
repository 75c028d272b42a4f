"""Command-line entry point: `python -m expandor_mcp` or `expandor-mcp`."""

from __future__ import annotations

import asyncio
import argparse
import contextlib
import dataclasses

from expandor_mcp import __version__
from expandor_mcp.server import serve
from expandor_mcp.state.settings import AppSettings
from expandor_mcp.runtime.logging import configure_logging
from expandor_mcp.runtime.settings_loader import load_settings, validate_port


def _apply_overrides(settings: AppSettings, args: argparse.Namespace) -> AppSettings:
    websocket = settings.websocket
    if args.host:
        websocket = dataclasses.replace(websocket, host=args.host)
    if args.port is not None:
        websocket = dataclasses.replace(websocket, port=validate_port(args.port, "--port"))
    logging_settings = settings.logging
    if args.verbose:
        logging_settings = dataclasses.replace(logging_settings, enabled=True)
    return dataclasses.replace(settings, websocket=websocket, logging=logging_settings)


def main() -> int:
    parser = argparse.ArgumentParser(description="MCP stdio server that forwards requests to a WebSocket client")
    parser.add_argument("--host", type=str, default=None, help="Interface for the client WebSocket (env WS_HOST)")
    parser.add_argument("--port", type=int, default=None, help="Port for the client WebSocket (env WS_PORT)")
    parser.add_argument("--verbose", action="store_true", help="Enable logging to stderr (env ENABLE_LOGGING)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    args = parser.parse_args()

    try:
        settings = _apply_overrides(load_settings(), args)
    except ValueError as exc:
        parser.error(str(exc))
    configure_logging(settings.logging)

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(serve(settings))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
