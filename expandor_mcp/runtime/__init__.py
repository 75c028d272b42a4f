"""Runtime package.

Keep this module dependency-light: importing `expandor_mcp.runtime.*` from
tests should not start uvicorn or the MCP stdio session.
"""

__all__: list[str] = []
