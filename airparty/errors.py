"""Protocol errors reported back to the originating connection.

None of these are fatal: the dispatcher turns them into an ``error`` envelope
and the connection stays open.
"""
from __future__ import annotations

from typing import Any, Optional


class ProtocolError(Exception):
    """Base class; ``message`` is what the client sees."""

    default_message = "Protocol error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class IdentityRequired(ProtocolError):
    default_message = "Send {type:'hello', id:'...'} first"


class InvalidIdentity(ProtocolError):
    default_message = "Missing id in hello"


class MissingRoomId(ProtocolError):
    default_message = "Missing room id"


class MissingTarget(ProtocolError):
    default_message = "Missing 'to' for relay"


class UnknownMessageType(ProtocolError):
    def __init__(self, msg_type: Any):
        self.msg_type = msg_type
        super().__init__(f"Unknown type: {msg_type}")


__all__ = [
    "ProtocolError",
    "IdentityRequired",
    "InvalidIdentity",
    "MissingRoomId",
    "MissingTarget",
    "UnknownMessageType",
]
