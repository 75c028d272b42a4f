"""MCP stdio server: binds host requests to the upstream adapter."""

from __future__ import annotations

import logging
import contextlib
from typing import Any
from collections.abc import Callable, Awaitable

import mcp.types as types
from pydantic import BaseModel, ValidationError
from mcp.shared.exceptions import McpError
from mcp.server.stdio import stdio_server
from mcp.server.lowlevel import Server, NotificationOptions

from expandor_mcp.errors import BridgeError
from expandor_mcp.bridge.upstream import UpstreamAdapter
from expandor_mcp.config.server import SERVER_NAME, SERVER_VERSION, NO_PEER_MESSAGE

from .notifier import HostNotifier

logger = logging.getLogger(__name__)

OperationFn = Callable[[dict[str, Any]], Awaitable[dict[str, Any] | None]]
HandlerFn = Callable[[Any], Awaitable[types.ServerResult]]


def _request_params(req: Any) -> dict[str, Any]:
    params = getattr(req, "params", None)
    if params is None:
        return {}
    return params.model_dump(by_alias=True, exclude_none=True, mode="json")


def _internal_error(message: str) -> McpError:
    return McpError(types.ErrorData(code=types.INTERNAL_ERROR, message=message))


def _make_handler(
    server: Server,
    notifier: HostNotifier,
    result_model: type[BaseModel],
    operation: OperationFn,
) -> HandlerFn:
    async def handle(req: Any) -> types.ServerResult:
        with contextlib.suppress(LookupError):
            notifier.bind(server.request_context.session)
        try:
            result = await operation(_request_params(req))
            return types.ServerResult(result_model.model_validate(result))
        except BridgeError as exc:
            logger.warning("%s failed: %s", type(req).__name__, exc)
            raise _internal_error(str(exc)) from exc
        except ValidationError as exc:
            logger.warning("%s: client reply does not fit %s", type(req).__name__, result_model.__name__)
            raise _internal_error(f"Invalid reply from client: {exc.error_count()} validation error(s)") from exc

    return handle


def build_mcp_server(upstream: UpstreamAdapter, notifier: HostNotifier) -> Server:
    server: Server = Server(SERVER_NAME, version=SERVER_VERSION)

    async def _list_resources(_params: dict[str, Any]) -> dict[str, Any]:
        return await upstream.list_resources()

    async def _list_resource_templates(_params: dict[str, Any]) -> dict[str, Any]:
        return await upstream.list_resource_templates()

    async def _list_prompts(_params: dict[str, Any]) -> dict[str, Any]:
        return await upstream.list_prompts()

    async def _list_tools(_params: dict[str, Any]) -> dict[str, Any]:
        return await upstream.list_tools()

    async def _get_prompt(params: dict[str, Any]) -> dict[str, Any]:
        result = await upstream.get_prompt(params)
        if result is None:
            return {"description": NO_PEER_MESSAGE, "messages": []}
        return result

    routes: list[tuple[type, type[BaseModel], OperationFn]] = [
        (types.ListResourcesRequest, types.ListResourcesResult, _list_resources),
        (types.ListResourceTemplatesRequest, types.ListResourceTemplatesResult, _list_resource_templates),
        (types.ReadResourceRequest, types.ReadResourceResult, upstream.read_resource),
        (types.ListPromptsRequest, types.ListPromptsResult, _list_prompts),
        (types.GetPromptRequest, types.GetPromptResult, _get_prompt),
        (types.ListToolsRequest, types.ListToolsResult, _list_tools),
        (types.CallToolRequest, types.CallToolResult, upstream.call_tool),
    ]
    for request_type, result_model, operation in routes:
        server.request_handlers[request_type] = _make_handler(server, notifier, result_model, operation)

    return server


async def run_stdio_server(server: Server) -> None:
    init_options = server.create_initialization_options(
        notification_options=NotificationOptions(prompts_changed=True, resources_changed=True, tools_changed=True),
    )
    async with stdio_server() as (read_stream, write_stream):
        logger.info("MCP server running on stdio")
        await server.run(read_stream, write_stream, init_options)


__all__ = ["build_mcp_server", "run_stdio_server"]
