"""Forwarding of opaque payloads between members of a room.

The payload is never inspected. Each recipient gets its own envelope with a
fresh ``serverNow``; unknown targets and closed connections are skipped
without telling the sender.
"""
from __future__ import annotations

from typing import Any

from .clock import server_now
from .constants import BROADCAST_TARGETS
from .logging_config import get_logger
from .schemas import RelayEnvelope
from .store import RoomStore

logger = get_logger(__name__)


def is_broadcast(to: str) -> bool:
    return to in BROADCAST_TARGETS


def relay(store: RoomStore, room_id: str, from_id: str, to: str, payload: Any) -> int:
    """Deliver *payload* from *from_id* to *to* (or everyone else); returns the number queued."""
    room = store.get(room_id)
    if room is None:
        return 0

    if is_broadcast(to):
        delivered = 0
        for pid, conn in list(room.members.items()):
            if pid == from_id:
                continue
            if conn.send(RelayEnvelope(from_=from_id, payload=payload, serverNow=server_now())):
                delivered += 1
        logger.debug(f"Relay {from_id} -> {to} in room {room_id}: {delivered} queued")
        return delivered

    target = room.members.get(to)
    if target is None:
        logger.debug(f"Relay {from_id} -> {to} in room {room_id}: no such member, dropped")
        return 0
    return 1 if target.send(RelayEnvelope(from_=from_id, payload=payload, serverNow=server_now())) else 0


__all__ = ["relay", "is_broadcast"]
