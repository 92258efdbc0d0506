"""Health check endpoints: liveness (no dependencies) and readiness (database round trip)."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from permgraph.core.config import get_settings
from permgraph.infrastructure.persistence.database import get_db
from permgraph.schemas.health import HealthResponse, ReadinessResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse(version=get_settings().app_version)


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database not configured"}},
)
async def readiness_check(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ReadinessResponse:
    """Return 200 once the database answers a trivial query."""
    await db.execute(text("SELECT 1"))
    return ReadinessResponse(database=db.get_bind().dialect.name)
