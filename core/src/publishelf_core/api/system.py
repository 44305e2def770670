from __future__ import annotations

import time
from datetime import UTC, datetime

from fastapi import APIRouter, Request
from pydantic import BaseModel

from publishelf_core.api.models import ApiResponse, ok

router = APIRouter(tags=["system"])


class ReadyInfo(BaseModel):
    timestamp: datetime
    uptime: float


@router.get("/ready", response_model=ApiResponse[ReadyInfo])
@router.get("/health", response_model=ApiResponse[ReadyInfo])
@router.get("/api/ready", response_model=ApiResponse[ReadyInfo])
async def ready(request: Request) -> ApiResponse[ReadyInfo]:
    started_at = getattr(request.app.state, "started_at", None) or time.monotonic()
    return ok(
        "READY",
        ReadyInfo(timestamp=datetime.now(UTC), uptime=time.monotonic() - started_at),
    )
