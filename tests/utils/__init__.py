"""Shared helpers for the bridge tests and the peer simulator."""

from __future__ import annotations

from .fakes import FakeSession, FakeWebSocket, make_settings, round_trip_reply

__all__ = ["FakeSession", "FakeWebSocket", "make_settings", "round_trip_reply"]
