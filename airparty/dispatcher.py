"""Protocol dispatcher.

Classifies every decoded inbound message and drives the session, the room
store and the relay engine. Validation failures surface as ``ProtocolError``
subclasses and are answered with an ``error`` envelope to the sender only.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict

from .clock import pong, server_now
from .constants import (
    MSG_CREATE_ROOM,
    MSG_HELLO,
    MSG_JOIN_ROOM,
    MSG_PING,
    MSG_RELAY,
)
from .errors import MissingRoomId, MissingTarget, ProtocolError, UnknownMessageType
from .logging_config import get_logger
from .relay import relay
from .schemas import ErrorMessage, HelloAck, RoomCreated, RoomJoined
from .session import Session, clean_text
from .store import RoomStore

if TYPE_CHECKING:
    from .connection import Connection

logger = get_logger(__name__)


class Dispatcher:
    def __init__(self, store: RoomStore):
        self.store = store

    # ---------------------------------------------------------------------
    # Entry points used by the transport
    # ---------------------------------------------------------------------

    def handle(self, conn: "Connection", session: Session, data: Any) -> None:
        """Process one decoded message; anything that is not an object is ignored."""
        if not isinstance(data, dict):
            return
        try:
            self._dispatch(conn, session, data)
        except ProtocolError as e:
            logger.debug(f"Protocol error on connection {conn!r} ({session.client_id or 'unidentified'}): {e.message}")
            conn.send(ErrorMessage(message=e.message))

    def disconnect(self, conn: "Connection", session: Session) -> None:
        """Tear down the session when its connection closes."""
        if session.client_id and session.room_id:
            self._leave_current_room(conn, session)

    # ---------------------------------------------------------------------
    # Routing
    # ---------------------------------------------------------------------

    def _dispatch(self, conn: "Connection", session: Session, data: Dict[str, Any]) -> None:
        msg_type = data.get("type")

        # Clock probe and identification work before hello
        if msg_type == MSG_PING:
            conn.send(pong(data.get("t0")))
            return
        if msg_type == MSG_HELLO:
            self.handle_hello(conn, session, data)
            return

        session.require_identity()

        if msg_type == MSG_CREATE_ROOM:
            self.handle_create_room(conn, session, data)
        elif msg_type == MSG_JOIN_ROOM:
            self.handle_join_room(conn, session, data)
        elif msg_type == MSG_RELAY:
            self.handle_relay(conn, session, data)
        else:
            raise UnknownMessageType(msg_type)

    # ---------------------------------------------------------------------
    # Handlers
    # ---------------------------------------------------------------------

    def handle_hello(self, conn: "Connection", session: Session, data: Dict[str, Any]) -> None:
        new_id = clean_text(data.get("id"))
        if session.room_id and new_id and new_id != session.client_id:
            # The old identity must not linger in the room as a ghost member.
            self._leave_current_room(conn, session)
        client_id = session.identify(new_id)
        logger.info(f"Connection {conn!r} identified as {client_id}")
        conn.send(HelloAck(id=client_id, serverNow=server_now()))

    def handle_create_room(self, conn: "Connection", session: Session, data: Dict[str, Any]) -> None:
        room_id = clean_text(data.get("room"))
        if not room_id:
            raise MissingRoomId()

        self._leave_current_room(conn, session)

        self.store.ensure_room(room_id)
        self.store.set_host(room_id, session.client_id)
        session.enter(room_id)
        room = self.store.add_member(room_id, session.client_id, conn)

        logger.info(f"{session.client_id} created room {room_id}")
        conn.send(RoomCreated(room=room_id))
        conn.send(RoomJoined(room=room_id, hostId=room.host_id, peers=room.peers_of(session.client_id)))

    def handle_join_room(self, conn: "Connection", session: Session, data: Dict[str, Any]) -> None:
        room_id = clean_text(data.get("room"))
        if not room_id:
            raise MissingRoomId()

        self._leave_current_room(conn, session)

        # Joining never fails on a missing room: the first joiner holds the
        # host role until the real host sends create_room.
        room = self.store.ensure_room(room_id)
        if not room.host_id:
            self.store.set_host(room_id, session.client_id)
        session.enter(room_id)
        room = self.store.add_member(room_id, session.client_id, conn)

        logger.info(f"{session.client_id} joined room {room_id} (host {room.host_id})")
        conn.send(RoomJoined(room=room_id, hostId=room.host_id, peers=room.peers_of(session.client_id)))

    def handle_relay(self, conn: "Connection", session: Session, data: Dict[str, Any]) -> None:
        room_id = clean_text(data.get("room")) or session.room_id
        to = clean_text(data.get("to"))
        if not room_id:
            raise MissingRoomId("Invalid room for relay")
        if not to:
            raise MissingTarget()

        # A relay can land just after a reconnect race emptied the room.
        self.store.ensure_room(room_id)
        relay(self.store, room_id, session.client_id, to, data.get("payload"))
        # ensure_room cancelled any pending deletion; an empty room must not be kept forever.
        self.store.schedule_deletion_if_empty(room_id)

    # ---------------------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------------------

    def _leave_current_room(self, conn: "Connection", session: Session) -> None:
        if not session.room_id:
            return
        previous = session.room_id
        session.leave()
        self.store.remove_member(previous, session.client_id, conn)
        logger.info(f"{session.client_id} left room {previous}")


__all__ = ["Dispatcher"]
