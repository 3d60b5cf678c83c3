"""Health check API routes.

Provides endpoints for:
- GET /health - Basic liveness check
- GET /health/ready - Readiness check (DB connectivity)
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_database
from copydesk.db import Database

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict:
    """Basic liveness check.

    Returns 200 if the service is running.
    No authentication required.

    Returns:
        dict: {"status": "ok"}
    """
    return {"status": "ok"}


@router.get("/ready")
async def ready(db: Annotated[Database, Depends(get_database)]) -> dict:
    """Readiness check.

    Verifies the database is reachable. No authentication required.

    Raises:
        HTTPException 503: Service not ready
    """
    db_healthy = db.ping()

    if not db_healthy:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Service not ready: database unavailable",
        )

    return {
        "status": "ok",
        "database": db_healthy,
    }
