"""Process configuration read from the environment.

Values are resolved once at import time; ``create_app`` accepts explicit
overrides for the few knobs tests need to change.
"""
from __future__ import annotations

import os
from typing import List, Optional

from .constants import DEFAULT_ROOM_GRACE_SECONDS, DEFAULT_SEND_QUEUE_SIZE

HOST: str = os.getenv("HOST", "0.0.0.0")
PORT: int = int(os.getenv("PORT", 8080))

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FILE: Optional[str] = os.getenv("LOG_FILE", None)

WS_PATH: str = os.getenv("AIRPARTY_WS_PATH", "/ws")
ROOM_GRACE_SECONDS: float = float(os.getenv("AIRPARTY_ROOM_GRACE_SECONDS", DEFAULT_ROOM_GRACE_SECONDS))
SEND_QUEUE_SIZE: int = int(os.getenv("AIRPARTY_SEND_QUEUE_SIZE", DEFAULT_SEND_QUEUE_SIZE))

# Comma separated; "*" allows every origin.
CORS_ORIGINS: List[str] = [o.strip() for o in os.getenv("AIRPARTY_CORS_ORIGINS", "*").split(",") if o.strip()]

__all__ = [
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "LOG_FILE",
    "WS_PATH",
    "ROOM_GRACE_SECONDS",
    "SEND_QUEUE_SIZE",
    "CORS_ORIGINS",
]
