"""Correlation of outbound requests with the peer's asynchronous replies.

Each pending round trip is an ``asyncio.Future`` keyed by its correlation id.
The future is the one-shot settlement cell: whichever of the peer reply or the
caller's timeout reaches it first wins, and the entry leaves the registry in
the same step. Anything arriving later finds no entry and is ignored.
"""

from __future__ import annotations

import time
import asyncio
import logging
from typing import Any
from collections.abc import Callable

from expandor_mcp.errors import PeerReportedError
from expandor_mcp.state.round_trip import PendingEntry

logger = logging.getLogger(__name__)

TimeFn = Callable[[], float]


class RoundTripRegistry:
    def __init__(self, *, now_fn: TimeFn | None = None) -> None:
        self._now = now_fn or time.monotonic
        self._pending: dict[str, PendingEntry] = {}

    def __len__(self) -> int:
        return len(self._pending)

    def __contains__(self, request_id: object) -> bool:
        return request_id in self._pending

    def pending_ids(self) -> list[str]:
        return list(self._pending)

    def oldest_age_s(self) -> float:
        if not self._pending:
            return 0.0
        oldest = min(entry.created_at for entry in self._pending.values())
        return max(0.0, self._now() - oldest)

    def register(self, request_id: str) -> asyncio.Future[Any]:
        """Create the waiter for ``request_id``.

        Must be called from inside the running event loop.
        """
        if request_id in self._pending:
            raise ValueError(f"request id {request_id!r} is already pending")
        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()
        self._pending[request_id] = PendingEntry(request_id=request_id, future=future, created_at=self._now())
        return future

    def settle(self, request_id: str, *, success: bool, data: Any = None, error: Any = None) -> bool:
        """Resolve or reject a pending round trip.

        Returns False when the id is unknown, e.g. a reply that arrives after
        the caller already timed out.
        """
        entry = self._pending.pop(request_id, None)
        if entry is None:
            logger.debug("round trip %s: no pending entry; reply ignored", request_id)
            return False
        if entry.future.done():
            return False
        if success:
            entry.future.set_result(data)
        else:
            entry.future.set_exception(PeerReportedError(request_id, error))
        return True

    def abandon(self, request_id: str) -> None:
        entry = self._pending.pop(request_id, None)
        if entry is None:
            return
        if not entry.future.done():
            entry.future.cancel()

    def clear(self) -> None:
        for request_id in list(self._pending):
            self.abandon(request_id)


__all__ = ["RoundTripRegistry"]
