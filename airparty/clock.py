"""Server clock used for timestamps and the ping/pong offset probe."""
from __future__ import annotations

import time
from typing import Any

from .schemas import Pong


def server_now() -> int:
    """Milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


def pong(t0: Any) -> Pong:
    """Echo the client's ``t0`` next to the current server time."""
    return Pong(t0=t0, serverNow=server_now())


__all__ = ["server_now", "pong"]
