"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from hirefeed.core.exceptions import StorageError

router = APIRouter(tags=["health"])

_READY_CHECK_KEY = "health_ready_check"


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
async def ready(request: Request):
    try:
        request.app.state.store.get(_READY_CHECK_KEY)
    except StorageError as exc:
        return JSONResponse(status_code=503, content={"status": "unavailable", "detail": str(exc)})
    return {"status": "ready", "storage": request.app.state.settings.storage.backend}
