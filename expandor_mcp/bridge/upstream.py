"""Host-facing operations: forward to the peer, or answer with a fallback.

Running without a peer is a normal operating mode. Every operation has a
fallback answer that is returned without touching the dispatcher and without
raising. Results are plain dicts in MCP result shape; `expandor_mcp.host`
turns them into SDK models.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from expandor_mcp.config.server import NO_PEER_MESSAGE
from expandor_mcp.errors import NoPeerError, InvalidReplyError, PeerReportedError, PeerConnectTimeoutError
from expandor_mcp.config.protocol import (
    REQ_CALL_TOOL,
    REQ_LIST_TOOLS,
    REQ_LIST_PROMPTS,
    REQ_READ_RESOURCE,
    REQ_LIST_RESOURCES,
    REQ_COMPLETE_PROMPT,
    REQ_LIST_RESOURCE_TEMPLATES,
)

from .dispatcher import RequestDispatcher

if TYPE_CHECKING:
    from expandor_mcp.handlers.connections import PeerConnectionManager

logger = logging.getLogger(__name__)


def _text_content(text: str) -> dict[str, Any]:
    return {"type": "text", "text": text}


def _unwrap(msg_type: str, data: Any, key: str) -> Any:
    if not isinstance(data, dict) or key not in data:
        raise InvalidReplyError(msg_type, key)
    return data[key]


class UpstreamAdapter:
    def __init__(
        self,
        *,
        peers: PeerConnectionManager,
        dispatcher: RequestDispatcher,
        grace_s: float = 0.0,
    ) -> None:
        self._peers = peers
        self._dispatcher = dispatcher
        self._grace_s = max(0.0, float(grace_s))

    async def _peer_available(self) -> bool:
        if self._peers.is_attached:
            return True
        if self._grace_s <= 0:
            return False
        try:
            await self._peers.wait_for_attachment(self._grace_s)
        except PeerConnectTimeoutError:
            return False
        return True

    async def _forward(self, msg_type: str, params: dict[str, Any] | None = None) -> Any | None:
        """Dispatch to the peer; None means no peer was attached."""
        if not await self._peer_available():
            logger.info("%s: no client connected; using fallback", msg_type)
            return None
        try:
            return await self._dispatcher.call(msg_type, params)
        except NoPeerError:
            # Peer detached between the check and the send.
            logger.info("%s: client went away; using fallback", msg_type)
            return None

    async def _forward_list(self, msg_type: str, key: str) -> dict[str, Any]:
        data = await self._forward(msg_type)
        if data is None:
            return {key: []}
        return {key: _unwrap(msg_type, data, key)}

    async def list_resources(self) -> dict[str, Any]:
        return await self._forward_list(REQ_LIST_RESOURCES, "resources")

    async def list_resource_templates(self) -> dict[str, Any]:
        return await self._forward_list(REQ_LIST_RESOURCE_TEMPLATES, "resourceTemplates")

    async def list_prompts(self) -> dict[str, Any]:
        return await self._forward_list(REQ_LIST_PROMPTS, "prompts")

    async def list_tools(self) -> dict[str, Any]:
        return await self._forward_list(REQ_LIST_TOOLS, "tools")

    async def read_resource(self, params: dict[str, Any]) -> dict[str, Any]:
        data = await self._forward(REQ_READ_RESOURCE, params)
        if data is None:
            return {
                "contents": [
                    {"uri": str(params.get("uri", "")), "mimeType": "text/plain", "text": NO_PEER_MESSAGE},
                ]
            }
        return {"contents": _unwrap(REQ_READ_RESOURCE, data, "contents")}

    async def get_prompt(self, params: dict[str, Any]) -> dict[str, Any] | None:
        data = await self._forward(REQ_COMPLETE_PROMPT, params)
        if data is None:
            return None
        result: dict[str, Any] = {"messages": _unwrap(REQ_COMPLETE_PROMPT, data, "messages")}
        if data.get("description") is not None:
            result["description"] = data["description"]
        return result

    async def call_tool(self, params: dict[str, Any]) -> dict[str, Any]:
        try:
            data = await self._forward(REQ_CALL_TOOL, params)
        except PeerReportedError as exc:
            # Peer-reported tool failures come back as error results.
            return {"isError": True, "content": [_text_content(str(exc))]}
        if data is None:
            return {"isError": True, "content": [_text_content(NO_PEER_MESSAGE)]}
        content = _unwrap(REQ_CALL_TOOL, data, "content")
        return {"isError": not bool(data.get("success", False)), "content": content}


__all__ = ["UpstreamAdapter"]
