"""Health check endpoint. No auth; used for liveness and readiness probes."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text

from policy_gate.core.config import get_settings
from policy_gate.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    """Return ok status for liveness, with the served surface and action count."""
    settings = get_settings()
    actions = getattr(request.app.state, "actions", None) or {}
    return HealthResponse(
        version=settings.app_version,
        surface=settings.client_surface,
        actions=len(actions),
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unreachable", "model": ReadinessErrorResponse}},
)
async def readiness_check() -> ReadinessResponse | JSONResponse:
    """Return 200 if ready; 503 if a configured database cannot be reached."""
    settings = get_settings()
    if not settings.database_url:
        return ReadinessResponse()

    from policy_gate.infrastructure.persistence.database import get_session_factory

    try:
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
    except Exception as exc:
        logger.warning("Readiness check failed: %s", exc)
        return JSONResponse(
            status_code=503,
            content=ReadinessErrorResponse(message="Database unreachable").model_dump(),
        )
    return ReadinessResponse(database="ok")
