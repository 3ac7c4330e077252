"""Pydantic models for every envelope the server sends.

Wire field names are camelCase to match what clients already speak; the
relay envelope's ``from`` field is exposed as ``from_`` in Python.
"""
from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field


class Envelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


# -----------------------------
# Session / clock
# -----------------------------

class HelloAck(Envelope):
    type: Literal["hello_ack"] = "hello_ack"
    id: str
    serverNow: int


class Pong(Envelope):
    type: Literal["pong"] = "pong"
    t0: Any = None  # echoed back untouched
    serverNow: int


class ErrorMessage(Envelope):
    type: Literal["error"] = "error"
    message: str


# -----------------------------
# Room lifecycle
# -----------------------------

class RoomCreated(Envelope):
    type: Literal["room_created"] = "room_created"
    room: str


class RoomJoined(Envelope):
    type: Literal["room_joined"] = "room_joined"
    room: str
    hostId: str
    peers: List[str] = Field(default_factory=list)  # excludes the recipient


class PeerJoined(Envelope):
    type: Literal["peer_joined"] = "peer_joined"
    peerId: str


class PeerLeft(Envelope):
    type: Literal["peer_left"] = "peer_left"
    peerId: str


class HostUpdate(Envelope):
    type: Literal["host_update"] = "host_update"
    hostId: str


# -----------------------------
# Relay
# -----------------------------

class RelayEnvelope(Envelope):
    type: Literal["relay"] = "relay"
    from_: str = Field(alias="from")
    payload: Any = None
    serverNow: int


class HealthResponse(BaseModel):
    ok: bool = True
    ts: int


__all__ = [
    "Envelope",
    "HelloAck",
    "Pong",
    "ErrorMessage",
    "RoomCreated",
    "RoomJoined",
    "PeerJoined",
    "PeerLeft",
    "HostUpdate",
    "RelayEnvelope",
    "HealthResponse",
]
