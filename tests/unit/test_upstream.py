from __future__ import annotations

import asyncio
from typing import Any

import pytest

from utils.fakes import FakeWebSocket, make_settings, round_trip_reply
from expandor_mcp.errors import InvalidReplyError, RoundTripTimeoutError
from expandor_mcp.runtime.dependencies import build_runtime_deps


class _Responder:
    """Answer every envelope the bridge sends with a canned reply per type."""

    def __init__(self, replies: dict[str, tuple[bool, Any]]) -> None:
        self.replies = replies
        self.seen: list[dict[str, Any]] = []
        self._task: asyncio.Task[None] | None = None

    def start(self, deps: Any, ws: FakeWebSocket) -> None:
        self._task = asyncio.create_task(self._run(deps, ws))

    async def _run(self, deps: Any, ws: FakeWebSocket) -> None:
        while True:
            envelope = await ws.outbox.get()
            self.seen.append(envelope)
            if envelope["type"] not in self.replies:
                continue
            success, payload = self.replies[envelope["type"]]
            if success:
                raw = round_trip_reply(envelope["id"], data=payload)
            else:
                raw = round_trip_reply(envelope["id"], success=False, error=payload)
            await deps.peers.handle_message(ws, raw)

    async def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)


async def _attached(replies: dict[str, tuple[bool, Any]], **settings_kwargs: Any):
    deps = build_runtime_deps(make_settings(**settings_kwargs))
    ws = FakeWebSocket()
    await deps.peers.attach(ws)
    responder = _Responder(replies)
    responder.start(deps, ws)
    return deps, responder


@pytest.mark.asyncio
async def test_fallbacks_without_peer() -> None:
    deps = build_runtime_deps(make_settings())
    upstream = deps.upstream

    assert await upstream.list_resources() == {"resources": []}
    assert await upstream.list_resource_templates() == {"resourceTemplates": []}
    assert await upstream.list_prompts() == {"prompts": []}
    assert await upstream.list_tools() == {"tools": []}
    assert await upstream.get_prompt({"name": "greet"}) is None

    read = await upstream.read_resource({"uri": "file:///notes.txt"})
    assert read == {
        "contents": [{"uri": "file:///notes.txt", "mimeType": "text/plain", "text": "No client connected"}],
    }

    tool = await upstream.call_tool({"name": "echo", "arguments": {}})
    assert tool == {"isError": True, "content": [{"type": "text", "text": "No client connected"}]}
    assert len(deps.registry) == 0


@pytest.mark.asyncio
async def test_list_tools_forwards_to_peer() -> None:
    tools = [{"name": "echo", "inputSchema": {"type": "object"}}]
    deps, responder = await _attached({"list_tools": (True, {"tools": tools})})
    try:
        assert await deps.upstream.list_tools() == {"tools": tools}
        assert responder.seen[0]["type"] == "list_tools"
        assert "params" not in responder.seen[0]
    finally:
        await responder.stop()


@pytest.mark.asyncio
async def test_every_list_operation_uses_its_wire_type() -> None:
    deps, responder = await _attached(
        {
            "list_resources": (True, {"resources": [{"uri": "a://1", "name": "one"}]}),
            "list_resource_templates": (True, {"resourceTemplates": []}),
            "list_prompts": (True, {"prompts": [{"name": "greet"}]}),
        }
    )
    try:
        assert (await deps.upstream.list_resources())["resources"][0]["uri"] == "a://1"
        assert await deps.upstream.list_resource_templates() == {"resourceTemplates": []}
        assert (await deps.upstream.list_prompts())["prompts"] == [{"name": "greet"}]
        assert [env["type"] for env in responder.seen] == ["list_resources", "list_resource_templates", "list_prompts"]
    finally:
        await responder.stop()


@pytest.mark.asyncio
async def test_read_resource_and_get_prompt_forward_params() -> None:
    contents = [{"uri": "file:///a", "text": "hello"}]
    messages = [{"role": "user", "content": {"type": "text", "text": "Hi Ada"}}]
    deps, responder = await _attached(
        {
            "read_resource": (True, {"contents": contents}),
            "complete_prompt": (True, {"description": "Greeting", "messages": messages}),
        }
    )
    try:
        assert await deps.upstream.read_resource({"uri": "file:///a"}) == {"contents": contents}
        prompt = await deps.upstream.get_prompt({"name": "greet", "arguments": {"who": "Ada"}})
        assert prompt == {"description": "Greeting", "messages": messages}
        assert responder.seen[0]["params"] == {"uri": "file:///a"}
        assert responder.seen[1]["type"] == "complete_prompt"
        assert responder.seen[1]["params"] == {"name": "greet", "arguments": {"who": "Ada"}}
    finally:
        await responder.stop()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("success", "expected_error"),
    [(True, False), (False, True)],
)
async def test_call_tool_maps_success_flag(success: bool, expected_error: bool) -> None:
    content = [{"type": "text", "text": "done"}]
    deps, responder = await _attached({"call_tool": (True, {"success": success, "content": content})})
    try:
        result = await deps.upstream.call_tool({"name": "echo", "arguments": {"text": "done"}})
        assert result == {"isError": expected_error, "content": content}
    finally:
        await responder.stop()


@pytest.mark.asyncio
async def test_call_tool_peer_error_becomes_error_result() -> None:
    deps, responder = await _attached({"call_tool": (False, {"message": "tool crashed"})})
    try:
        result = await deps.upstream.call_tool({"name": "echo"})
        assert result == {"isError": True, "content": [{"type": "text", "text": "tool crashed"}]}
    finally:
        await responder.stop()


@pytest.mark.asyncio
async def test_reply_missing_result_key_is_invalid() -> None:
    deps, responder = await _attached({"list_tools": (True, {"prompts": []})})
    try:
        with pytest.raises(InvalidReplyError):
            await deps.upstream.list_tools()
    finally:
        await responder.stop()


@pytest.mark.asyncio
async def test_silent_peer_times_out() -> None:
    deps, responder = await _attached({}, round_trip_timeout_s=0.05)
    try:
        with pytest.raises(RoundTripTimeoutError):
            await deps.upstream.list_tools()
        assert len(deps.registry) == 0
    finally:
        await responder.stop()


@pytest.mark.asyncio
async def test_grace_window_waits_for_late_peer() -> None:
    deps = build_runtime_deps(make_settings(peer_grace_s=1.0, peer_poll_interval_s=0.01))
    ws = FakeWebSocket()
    responder = _Responder({"list_tools": (True, {"tools": [{"name": "late"}]})})

    async def _attach_later() -> None:
        await asyncio.sleep(0.05)
        await deps.peers.attach(ws)
        responder.start(deps, ws)

    attach_task = asyncio.create_task(_attach_later())
    try:
        assert await deps.upstream.list_tools() == {"tools": [{"name": "late"}]}
    finally:
        await attach_task
        await responder.stop()


@pytest.mark.asyncio
async def test_grace_window_expires_into_fallback() -> None:
    deps = build_runtime_deps(make_settings(peer_grace_s=0.05, peer_poll_interval_s=0.01))
    assert await deps.upstream.list_prompts() == {"prompts": []}
