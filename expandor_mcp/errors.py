"""Shared error types for the expandor MCP bridge."""

from __future__ import annotations

from typing import Any


class BridgeError(Exception):
    """Base class for failures raised while forwarding a host request."""


class NoPeerError(BridgeError):
    """Raised when a request needs the peer but none is attached."""

    def __init__(self, message: str = "No client connected") -> None:
        super().__init__(message)


class PeerConnectTimeoutError(BridgeError):
    """Raised when no peer attached within the wait window."""

    def __init__(self, timeout_s: float) -> None:
        self.timeout_s = timeout_s
        super().__init__(f"Timeout waiting for client connection after {timeout_s:g}s")


class RoundTripTimeoutError(BridgeError):
    """Raised when the attached peer never answered one request."""

    def __init__(self, request_id: str, timeout_s: float) -> None:
        self.request_id = request_id
        self.timeout_s = timeout_s
        super().__init__(f"Timeout waiting for reply to request {request_id} after {timeout_s:g}s")


class PeerReportedError(BridgeError):
    """Raised when the peer answered a request with success=false."""

    def __init__(self, request_id: str, error: Any) -> None:
        self.request_id = request_id
        self.error = error
        super().__init__(_describe_peer_error(error))


class InvalidReplyError(BridgeError):
    """Raised when a successful reply does not carry the expected result shape."""

    def __init__(self, msg_type: str, expected_key: str) -> None:
        self.msg_type = msg_type
        self.expected_key = expected_key
        super().__init__(f"Reply to {msg_type} is missing '{expected_key}'")


def _describe_peer_error(error: Any) -> str:
    if isinstance(error, str) and error.strip():
        return error.strip()
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    if error is None:
        return "Client reported an error"
    return str(error)


__all__ = [
    "BridgeError",
    "InvalidReplyError",
    "NoPeerError",
    "PeerConnectTimeoutError",
    "PeerReportedError",
    "RoundTripTimeoutError",
]
