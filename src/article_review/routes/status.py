"""Status route — liveness and uptime."""

from __future__ import annotations

import time
from typing import Any

from fastapi import APIRouter, Request

router = APIRouter(tags=["status"])


@router.get("/status")
async def status(request: Request) -> dict[str, Any]:
    """Report environment and process uptime."""
    settings = request.app.state.settings
    start_time = request.app.state.start_time
    return {
        "status": "ok",
        "environment": settings.app.env,
        "uptime_seconds": round(time.monotonic() - start_time, 1),
    }
