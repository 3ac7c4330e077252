from __future__ import annotations

import json
from typing import Any, Optional

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..config import WS_PATH
from ..connection import Connection
from ..dispatcher import Dispatcher
from ..logging_config import get_logger
from ..session import Session

logger = get_logger(__name__)

router = APIRouter(prefix="", tags=["ws"])

_NOT_DECODED = object()


def decode_frame(message: dict) -> Any:
    """Return the JSON value carried by a websocket.receive message, or ``_NOT_DECODED``."""
    raw: Optional[str] = message.get("text")
    if raw is None and message.get("bytes") is not None:
        try:
            raw = message["bytes"].decode("utf-8")
        except UnicodeDecodeError:
            return _NOT_DECODED
    if raw is None:
        return _NOT_DECODED
    try:
        return json.loads(raw)
    except ValueError:
        return _NOT_DECODED


@router.websocket(WS_PATH)
async def relay_ws_endpoint(ws: WebSocket):
    await ws.accept()
    dispatcher: Dispatcher = ws.app.state.dispatcher
    conn = Connection(ws, queue_size=ws.app.state.send_queue_size)
    session = Session()
    conn.start()
    client = f"{ws.client.host}:{ws.client.port}" if ws.client else "unknown"
    logger.info(f"Connection {conn.connection_id} accepted from {client}")

    try:
        while True:
            message = await ws.receive()
            if message["type"] == "websocket.disconnect":
                break
            data = decode_frame(message)
            if data is _NOT_DECODED:
                # Garbled input is dropped without a reply
                logger.debug(f"Ignoring undecodable frame on connection {conn.connection_id}")
                continue
            dispatcher.handle(conn, session, data)
    except WebSocketDisconnect:
        pass
    except Exception as e:
        logger.error(f"WebSocket error on connection {conn.connection_id}: {e}", exc_info=True)
    finally:
        dispatcher.disconnect(conn, session)
        await conn.close()
        logger.info(f"Connection {conn.connection_id} closed ({session.client_id or 'unidentified'})")
