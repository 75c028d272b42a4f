"""Round-trip correlation between host requests and peer replies.

Submodules are imported directly; `expandor_mcp.handlers.connections` imports
the registry, so this package must not import the dispatcher eagerly.
"""

__all__: list[str] = []
