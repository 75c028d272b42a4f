from .peer import PeerState, PeerConnection
from .runtime import RuntimeDeps
from .settings import AppSettings
from .round_trip import PendingEntry

__all__ = ["AppSettings", "PeerConnection", "PeerState", "PendingEntry", "RuntimeDeps"]
