"""MCP server identity advertised to the host."""

from __future__ import annotations

from expandor_mcp import __version__

SERVER_NAME = "expandor-mcp"
SERVER_VERSION = __version__

# Text shown to the host whenever a fallback answer stands in for the peer.
NO_PEER_MESSAGE = "No client connected"

__all__ = ["NO_PEER_MESSAGE", "SERVER_NAME", "SERVER_VERSION"]
