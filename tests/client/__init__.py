"""WebSocket peer implementations for runnable scripts under tests/."""

from __future__ import annotations

from .peer import PeerClient, PeerRunResult, default_catalog

__all__ = ["PeerClient", "PeerRunResult", "default_catalog"]
