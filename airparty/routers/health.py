from __future__ import annotations

from fastapi import APIRouter

from ..clock import server_now
from ..schemas import HealthResponse

router = APIRouter(prefix="", tags=["health"])


@router.get("/", response_model=HealthResponse)
async def health():
    return HealthResponse(ok=True, ts=server_now())


# Any path starting with /health answers, e.g. /healthz or /health/live
@router.get("/health{suffix:path}", response_model=HealthResponse)
async def health_prefixed(suffix: str):
    return HealthResponse(ok=True, ts=server_now())
