from __future__ import annotations

from typing import Any, Dict, List

import pytest

from airparty.dispatcher import Dispatcher
from airparty.schemas import Envelope
from airparty.session import Session
from airparty.store import RoomStore

SHORT_GRACE = 0.05


class FakeConnection:
    """Stands in for ``Connection``; records every envelope it is asked to send."""

    def __init__(self, name: str = "conn"):
        self.name = name
        self.sent: List[Dict[str, Any]] = []
        self.is_open = True

    def __repr__(self) -> str:
        return f"<FakeConnection {self.name}>"

    def send(self, message: Any) -> bool:
        if not self.is_open:
            return False
        self.sent.append(message.to_wire() if isinstance(message, Envelope) else dict(message))
        return True

    def types(self) -> List[str]:
        return [m["type"] for m in self.sent]

    def of_type(self, msg_type: str) -> List[Dict[str, Any]]:
        return [m for m in self.sent if m["type"] == msg_type]

    def clear(self) -> None:
        self.sent.clear()


class Client:
    """A fake connection plus the session the transport would own for it."""

    def __init__(self, dispatcher: Dispatcher, name: str):
        self.dispatcher = dispatcher
        self.conn = FakeConnection(name)
        self.session = Session()

    def send(self, **data: Any) -> None:
        self.dispatcher.handle(self.conn, self.session, data)

    def hello(self, client_id: str) -> "Client":
        self.send(type="hello", id=client_id)
        return self

    def close(self) -> None:
        self.conn.is_open = False
        self.dispatcher.disconnect(self.conn, self.session)

    @property
    def sent(self) -> List[Dict[str, Any]]:
        return self.conn.sent


@pytest.fixture
def store() -> RoomStore:
    return RoomStore(grace_seconds=SHORT_GRACE)


@pytest.fixture
def dispatcher(store: RoomStore) -> Dispatcher:
    return Dispatcher(store)


@pytest.fixture
def make_client(dispatcher: Dispatcher):
    def _make(name: str, identify: bool = True) -> Client:
        client = Client(dispatcher, name)
        if identify:
            client.hello(name)
            client.conn.clear()
        return client

    return _make


@pytest.fixture
def make_conn():
    return FakeConnection
