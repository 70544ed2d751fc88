"""Router – health check."""

import os

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(request: Request) -> JSONResponse:
    """Liveness / readiness probe; 503 when uploads cannot be stored."""
    storage_dir = request.app.state.settings.storage_dir
    writable = storage_dir.is_dir() and os.access(storage_dir, os.W_OK)
    return JSONResponse(
        status_code=200 if writable else 503,
        content={"status": "ok" if writable else "degraded", "storage_writable": writable},
    )
