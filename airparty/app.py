from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .dispatcher import Dispatcher
from .logging_config import get_logger, setup_logging
from .routers import health as health_router
from .routers import websockets as ws_router
from .store import RoomStore

setup_logging(log_level=config.LOG_LEVEL, log_file=config.LOG_FILE)
logger = get_logger(__name__)


def create_app(grace_seconds: Optional[float] = None, send_queue_size: Optional[int] = None) -> FastAPI:
    """Build the ASGI app with its own room store.

    *grace_seconds* and *send_queue_size* default to the environment
    configuration; tests pass small values.
    """
    store = RoomStore(grace_seconds=config.ROOM_GRACE_SECONDS if grace_seconds is None else grace_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"AirParty relay ready, WebSocket endpoint: {config.WS_PATH}")
        yield
        store.close()
        logger.info("AirParty relay stopped")

    app = FastAPI(title="AirParty Relay", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.store = store
    app.state.dispatcher = Dispatcher(store)
    app.state.send_queue_size = config.SEND_QUEUE_SIZE if send_queue_size is None else send_queue_size

    app.include_router(health_router.router)
    app.include_router(ws_router.router)
    return app


app = create_app()

__all__ = ["app", "create_app"]
