"""System and transparency endpoints for picvoter."""

from __future__ import annotations

import time

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from picvoter.api.v1.dependencies import SessionDep, SettingsDep
from picvoter.repositories.image_repo import ImageRepository

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/health")
async def get_system_health(db: SessionDep, settings: SettingsDep) -> dict[str, object]:
    """Health check covering the database and the storage directories.

    Returns:
        Dictionary with overall status, component health and version info
    """
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as e:
        db_status = f"unhealthy: {e}"

    storage = {
        "imports": settings.imports_dir.is_dir(),
        "raws": settings.raws_dir.is_dir(),
        "resized": settings.resized_dir.is_dir(),
    }
    healthy = db_status == "healthy" and all(storage.values())

    return {
        "status": "healthy" if healthy else "unhealthy",
        "timestamp": int(time.time()),
        "components": {
            "database": db_status,
            "storage": storage,
        },
        "version": settings.app_version,
    }


@router.get("/stats")
async def get_stats(db: SessionDep, settings: SettingsDep) -> dict[str, int]:
    """Image and vote counters.

    Returns:
        Dictionary with total images, images still in rotation, and total votes
    """
    repo = ImageRepository(db)
    return {
        "images": repo.count(),
        "eligible": repo.count_eligible(settings.suppression_threshold),
        "votes": repo.total_votes(),
    }
