"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the configured store is unreachable (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - The file backend is ready when its data directory exists or can be created
"""

import asyncio
import logging
from pathlib import Path

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

import app.infrastructure.database as database
from app.config import Settings, get_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "training-hub-api",
        "version": "1.0.0",
    }


def _data_dir_ready(data_dir: str) -> bool:
    try:
        Path(data_dir).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Data directory check failed: {e}")
        return False
    return True


@router.get("/ready")
async def readiness_check(settings: Settings = Depends(get_settings)):
    """Readiness probe — includes storage connectivity."""
    if settings.storage_backend == "json":
        store_ok = await asyncio.to_thread(_data_dir_ready, settings.json_data_dir)
        check = "files"
    else:
        store_ok = (
            await database.db_manager.health_check() if database.db_manager else False
        )
        check = "database"

    if not store_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": f"{check}_unavailable",
            },
        )
    return {"status": "ready", "checks": {check: "healthy"}}
