"""Host-facing list_changed notifications."""

from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger(__name__)


class HostNotifier:
    """Tell the host that the peer's resources, prompts and tools may have changed.

    The MCP session only becomes reachable once the host sends its first
    request, so the session is captured there. Before that the host has not
    cached any list and there is nothing to invalidate.
    """

    def __init__(self) -> None:
        self._session: Any | None = None

    @property
    def is_bound(self) -> bool:
        return self._session is not None

    def bind(self, session: Any) -> None:
        if self._session is session:
            return
        self._session = session
        logger.debug("host session bound")

    async def notify_capabilities_changed(self) -> None:
        session = self._session
        if session is None:
            logger.debug("host session not ready; skipping list_changed notifications")
            return
        await session.send_resource_list_changed()
        await session.send_prompt_list_changed()
        await session.send_tool_list_changed()
        logger.info("sent resources/prompts/tools list_changed to host")


__all__ = ["HostNotifier"]
