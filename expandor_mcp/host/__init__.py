from .notifier import HostNotifier
from .server import build_mcp_server, run_stdio_server

__all__ = ["HostNotifier", "build_mcp_server", "run_stdio_server"]
