"""Health & Readiness Probes — liveness and readiness endpoints.

Invariants:
    - GET /ok always returns 200 {ok: true} if the process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable (readiness)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from budget_api.api.dependencies import get_db_manager
from budget_api.infrastructure.database import DatabaseSessionManager

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])


@router.get("/ok", status_code=status.HTTP_200_OK)
async def ok():
    """Basic liveness probe."""
    return {"ok": True}


@router.get("/health/ready")
async def readiness_check(
    db_manager: DatabaseSessionManager = Depends(get_db_manager),
):
    """Readiness probe — includes database connectivity."""
    if not await db_manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
