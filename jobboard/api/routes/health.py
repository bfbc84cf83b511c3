"""Liveness and store connectivity."""

from typing import Any

from fastapi import APIRouter, Depends

from jobboard import __version__
from jobboard.api.dependencies import database_manager
from jobboard.data.database import DatabaseManager

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(db_manager: DatabaseManager = Depends(database_manager)) -> dict[str, Any]:
    connected = await db_manager.check_async_connection()
    return {
        "status": "ok" if connected else "degraded",
        "database": "connected" if connected else "unavailable",
        "version": __version__,
    }
