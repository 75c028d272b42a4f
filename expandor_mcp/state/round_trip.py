"""Pending round-trip entries (dataclasses only)."""

from __future__ import annotations

import asyncio
from typing import Any
from dataclasses import dataclass


@dataclass(slots=True)
class PendingEntry:
    request_id: str
    future: asyncio.Future[Any]
    created_at: float


__all__ = ["PendingEntry"]
