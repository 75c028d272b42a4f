"""MCP stdio server that forwards host requests to a single WebSocket peer."""

__version__ = "0.2.2"

__all__ = ["__version__"]
