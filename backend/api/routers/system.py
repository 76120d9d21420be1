"""
System-related API endpoints (health, db version, etc.).

These endpoints provide system information and health checks:
- Check if the backend is running and whether its worker pool accepts work
- Detect database resets (to refresh cached data)
"""
from fastapi import APIRouter, Request
from db import get_db, get_db_version
from typing import Dict

router = APIRouter(tags=["system"])


@router.get("/")
def root(request: Request) -> Dict[str, str | int | None]:
    """
    Root endpoint - health check.

    Reports the worker pool size and how many per-item tasks are still
    running (including tasks left behind by a timed-out batch).
    """
    pool = getattr(request.app.state, "worker_pool", None)
    return {
        "message": "Backend running!",
        "pool_size": pool.size if pool else None,
        "pool_in_flight": pool.in_flight if pool else None,
    }


@router.get("/api/db-version")
async def get_db_version_endpoint() -> Dict[str, str | None]:
    """
    Get the database version/timestamp to detect database resets.

    Returns the database initialization timestamp, which changes whenever
    the database is recreated.
    """
    async with get_db() as db:
        version = await get_db_version(db)
        return {"db_version": version}
