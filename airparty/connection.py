"""Connection handle: the only way the core talks to a client.

``send`` never suspends. Envelopes go onto a bounded per-connection queue that
a sender task drains into the WebSocket, so a slow client only ever delays its
own traffic. When the queue is full, or the socket is gone, the envelope is
dropped.
"""
from __future__ import annotations

import asyncio
import uuid
from typing import Any, Dict, Optional, Union

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from .constants import DEFAULT_SEND_QUEUE_SIZE
from .logging_config import get_logger
from .schemas import Envelope

logger = get_logger(__name__)

Message = Union[Envelope, Dict[str, Any]]


class Connection:
    """Addressable channel to one connected client."""

    def __init__(self, websocket: WebSocket, queue_size: int = DEFAULT_SEND_QUEUE_SIZE):
        self.websocket = websocket
        # Short opaque id, only used to tell connections apart in logs.
        self.connection_id = uuid.uuid4().hex[:8]
        self._outbox: asyncio.Queue = asyncio.Queue(maxsize=queue_size)
        self._sender: Optional[asyncio.Task] = None
        self._closed = False

    def __repr__(self) -> str:
        return f"<Connection {self.connection_id}>"

    @property
    def is_open(self) -> bool:
        if self._closed:
            return False
        return (
            self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    # -------------------- Outbound -------------------- #

    def send(self, message: Message) -> bool:
        """Queue *message* for delivery; returns ``False`` if it was dropped."""
        if not self.is_open:
            logger.debug(f"Dropping message for closed connection {self.connection_id}")
            return False
        data = message.to_wire() if isinstance(message, Envelope) else message
        try:
            self._outbox.put_nowait(data)
        except asyncio.QueueFull:
            logger.warning(
                f"Outbound queue full for connection {self.connection_id}, dropping {data.get('type')!r}"
            )
            return False
        return True

    def start(self) -> None:
        if self._sender is None:
            self._sender = asyncio.create_task(self._pump())

    async def _pump(self) -> None:
        while True:
            data = await self._outbox.get()
            try:
                await self.websocket.send_json(data)
            except Exception as e:
                # Peer went away mid-send; nothing else to deliver.
                logger.debug(f"Send failed on connection {self.connection_id}: {e}")
                self._closed = True
                return

    # -------------------- Lifecycle -------------------- #

    async def close(self) -> None:
        """Stop accepting sends and tear down the sender task."""
        self._closed = True
        if self._sender is None:
            return
        if not self._sender.done():
            self._sender.cancel()
        try:
            await self._sender
        except asyncio.CancelledError:
            pass
        self._sender = None


__all__ = ["Connection", "Message"]
