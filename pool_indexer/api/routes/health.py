"""Health & Readiness Checks — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready returns 503 if database is unreachable (readiness)
    - GET /api/v1/health/conditions lists the non-fatal accounting conditions the
      pipeline reported, bounded by settings.reported_conditions_limit
"""

import logging
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from pool_indexer.infrastructure import database
from pool_indexer.schemas.read_models import (
    ReportedConditionResponse, ReportedConditionsResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "pool-indexer",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness check — includes database connectivity."""
    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}


@router.get("/conditions", response_model=ReportedConditionsResponse)
async def reported_conditions(request: Request):
    """Zero-supply shares and other conditions processing continued past."""
    pipeline = getattr(request.app.state, "pipeline", None)
    if pipeline is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "pipeline_unavailable"},
        )
    return ReportedConditionsResponse(
        limit=pipeline.settings.reported_conditions_limit,
        conditions=[
            ReportedConditionResponse.model_validate(c)
            for c in pipeline.reported_conditions
        ],
    )
