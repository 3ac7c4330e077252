"""Authoritative room table and every room lifecycle transition.

All public methods are synchronous and never await, so on a single event loop
a membership change and the notifications it triggers always complete before
any other message is handled. Notifications go through ``Connection.send``,
which only queues, so members observe them in the order they were issued.
"""
from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Dict, Iterator, Optional

from .constants import DEFAULT_ROOM_GRACE_SECONDS
from .logging_config import get_logger
from .room import Room
from .schemas import HostUpdate, PeerJoined, PeerLeft

if TYPE_CHECKING:
    from .connection import Connection

logger = get_logger(__name__)


class RoomStore:
    """Owns the ``room_id -> Room`` map for the lifetime of the process."""

    def __init__(self, grace_seconds: float = DEFAULT_ROOM_GRACE_SECONDS):
        self.grace_seconds = grace_seconds
        self._rooms: Dict[str, Room] = {}

    # -------------------- Lookups -------------------- #

    def get(self, room_id: str) -> Optional[Room]:
        return self._rooms.get(room_id)

    def __contains__(self, room_id: object) -> bool:
        return room_id in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)

    def __iter__(self) -> Iterator[Room]:
        return iter(list(self._rooms.values()))

    # -------------------- Lifecycle -------------------- #

    def ensure_room(self, room_id: str) -> Room:
        """Return the room, creating an empty one if needed; cancels a pending deletion."""
        room = self._rooms.get(room_id)
        if room is None:
            room = Room(room_id)
            self._rooms[room_id] = room
            logger.info(f"Room {room_id} created")
        elif room.pending_deletion:
            logger.debug(f"Cancelled pending deletion of room {room_id}")
        room.cancel_cleanup()
        return room

    def set_host(self, room_id: str, client_id: str) -> Room:
        """Assign the host without notifying; the next ``add_member`` announces it."""
        room = self.ensure_room(room_id)
        if room.host_id != client_id:
            logger.info(f"Host of room {room_id} set to {client_id}")
        room.host_id = client_id
        return room

    def add_member(self, room_id: str, client_id: str, handle: "Connection") -> Room:
        """Insert (or overwrite) *client_id* and announce it to the room.

        Existing members get ``peer_joined`` first; then every member,
        the newcomer included, gets the current ``host_update``.
        """
        room = self.ensure_room(room_id)
        previous = room.members.get(client_id)
        if previous is not None and previous is not handle:
            logger.warning(f"Client {client_id} joined room {room_id} from a new connection, replacing the old one")
        room.members[client_id] = handle
        logger.debug(f"Client {client_id} added to room {room_id} ({len(room.members)} members)")

        room.broadcast(PeerJoined(peerId=client_id), exclude=client_id)
        room.broadcast(HostUpdate(hostId=room.host_id))
        return room

    def remove_member(
        self,
        room_id: str,
        client_id: str,
        handle: Optional["Connection"] = None,
    ) -> Optional[Room]:
        """Remove *client_id*, promote a new host if needed and notify the rest.

        When *handle* is given and the member entry now belongs to a different
        connection, the call does nothing. An emptied room is scheduled for
        deletion after the grace period.
        """
        room = self._rooms.get(room_id)
        if room is None:
            return None

        current = room.members.get(client_id)
        if handle is not None and current is not None and current is not handle:
            logger.debug(f"Client {client_id} in room {room_id} belongs to a newer connection, keeping it")
            return room
        if current is None and room.host_id != client_id:
            return room

        room.members.pop(client_id, None)
        logger.debug(f"Client {client_id} removed from room {room_id} ({len(room.members)} members)")

        if room.host_id == client_id:
            new_host = room.promote_host()
            if new_host:
                logger.info(f"Host of room {room_id} passed from {client_id} to {new_host}")

        room.broadcast(PeerLeft(peerId=client_id))
        room.broadcast(HostUpdate(hostId=room.host_id))

        if room.is_empty:
            self._schedule_deletion(room)
        return room

    # -------------------- Deferred deletion -------------------- #

    def schedule_deletion_if_empty(self, room_id: str) -> None:
        """Arm the grace-period deletion for *room_id* if it exists and has no members."""
        room = self._rooms.get(room_id)
        if room is not None and room.is_empty:
            self._schedule_deletion(room)

    def _schedule_deletion(self, room: Room) -> None:
        if room.pending_deletion:
            return
        logger.info(f"Room {room.room_id} is empty, deleting in {self.grace_seconds:g}s unless someone rejoins")
        room.cleanup_task = asyncio.create_task(self._prune_after_delay(room.room_id, self.grace_seconds))

    async def _prune_after_delay(self, room_id: str, delay: float) -> None:
        try:
            await asyncio.sleep(delay)
        except asyncio.CancelledError:
            return
        room = self._rooms.get(room_id)
        if room is None:
            return
        if room.is_empty:
            del self._rooms[room_id]
            logger.info(f"Room {room_id} deleted after grace period")
        room.cleanup_task = None

    def close(self) -> None:
        """Cancel every pending deletion; used on shutdown."""
        for room in self._rooms.values():
            room.cancel_cleanup()


__all__ = ["RoomStore"]
