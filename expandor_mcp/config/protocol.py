"""Message kinds exchanged with the peer."""

from __future__ import annotations

# Inbound (peer -> bridge)
PEER_MSG_PING = "ping"
PEER_MSG_CLIENT_CONNECTED = "client_connected"
PEER_MSG_ROUND_TRIP = "round_trip"

# Outbound (bridge -> peer)
PEER_MSG_PONG = "pong"

REQ_LIST_RESOURCES = "list_resources"
REQ_LIST_RESOURCE_TEMPLATES = "list_resource_templates"
REQ_READ_RESOURCE = "read_resource"
REQ_LIST_PROMPTS = "list_prompts"
REQ_COMPLETE_PROMPT = "complete_prompt"
REQ_LIST_TOOLS = "list_tools"
REQ_CALL_TOOL = "call_tool"

# Length of generated correlation ids.
REQUEST_ID_LENGTH = 10

__all__ = [
    "PEER_MSG_PING",
    "PEER_MSG_CLIENT_CONNECTED",
    "PEER_MSG_ROUND_TRIP",
    "PEER_MSG_PONG",
    "REQ_LIST_RESOURCES",
    "REQ_LIST_RESOURCE_TEMPLATES",
    "REQ_READ_RESOURCE",
    "REQ_LIST_PROMPTS",
    "REQ_COMPLETE_PROMPT",
    "REQ_LIST_TOOLS",
    "REQ_CALL_TOOL",
    "REQUEST_ID_LENGTH",
]
