from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Dict, List, Optional

if TYPE_CHECKING:
    from .connection import Connection, Message


class Room:
    """Membership, host and pending-deletion state for one relay room."""

    def __init__(self, room_id: str):
        self.room_id = room_id
        self.host_id: str = ""
        # client_id -> connection handle; insertion order drives host promotion
        self.members: Dict[str, "Connection"] = {}
        # Task created when the room becomes empty; prunes it after the grace period
        self.cleanup_task: Optional[asyncio.Task] = None

    def __repr__(self) -> str:
        return f"<Room {self.room_id!r} host={self.host_id!r} members={len(self.members)}>"

    # ---------------------------------------------------------------------
    # Membership
    # ---------------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self.members

    def peers_of(self, client_id: str) -> List[str]:
        """Every member id except *client_id*."""
        return [pid for pid in self.members if pid != client_id]

    def promote_host(self) -> str:
        """Hand the host role to the first remaining member (or nobody)."""
        self.host_id = next(iter(self.members), "")
        return self.host_id

    # ---------------------------------------------------------------------
    # Pending deletion
    # ---------------------------------------------------------------------

    @property
    def pending_deletion(self) -> bool:
        return self.cleanup_task is not None and not self.cleanup_task.done()

    def cancel_cleanup(self) -> None:
        if self.cleanup_task is not None and not self.cleanup_task.done():
            self.cleanup_task.cancel()
        self.cleanup_task = None

    # ---------------------------------------------------------------------
    # Broadcasting helpers
    # ---------------------------------------------------------------------

    def broadcast(self, message: "Message", exclude: Optional[str] = None) -> None:
        """Queue *message* for every member except *exclude*; closed handles are skipped."""
        for pid, conn in list(self.members.items()):
            if pid == exclude:
                continue
            conn.send(message)


__all__ = ["Room"]
