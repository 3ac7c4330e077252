"""Per-connection session state.

A ``Session`` is created empty when a connection is accepted and lives exactly
as long as the connection task that owns it.
"""
from __future__ import annotations

from typing import Any

from .errors import IdentityRequired, InvalidIdentity


def clean_text(value: Any) -> str:
    """Stringify and trim a client-supplied field; missing or falsy means ``""``."""
    if not value:
        return ""
    return str(value).strip()


class Session:
    def __init__(self) -> None:
        self.client_id: str = ""
        self.room_id: str = ""

    def __repr__(self) -> str:
        return f"<Session client_id={self.client_id!r} room_id={self.room_id!r}>"

    @property
    def identified(self) -> bool:
        return bool(self.client_id)

    def identify(self, client_id: Any) -> str:
        """Bind *client_id* to this session, replacing any previous identity.

        Raises ``InvalidIdentity`` if the id is empty after trimming.
        """
        cleaned = clean_text(client_id)
        if not cleaned:
            raise InvalidIdentity()
        self.client_id = cleaned
        return cleaned

    def require_identity(self) -> str:
        if not self.client_id:
            raise IdentityRequired()
        return self.client_id

    def current_room(self) -> str:
        return self.room_id

    def enter(self, room_id: str) -> None:
        self.room_id = room_id

    def leave(self) -> None:
        self.room_id = ""


__all__ = ["Session", "clean_text"]
