"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring; no business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from permgraph.application.services.precedence_policy import PrecedencePolicy
from permgraph.core.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit dispose the SQL engine.

    Startup validates the configured precedence policy once and keeps it on
    app.state.precedence_policy for request handlers.
    """
    settings = get_settings()

    # ---- Startup ----
    app.state.precedence_policy = PrecedencePolicy.from_mapping(
        settings.dependency_precedence_policy
    )
    logger.info(
        "%s %s starting (max_depth_limit=%d, visit_limit=%d)",
        settings.app_name,
        settings.app_version,
        settings.dependency_max_depth_limit,
        settings.dependency_visit_limit,
    )

    yield

    # ---- Shutdown ----
    from permgraph.infrastructure.persistence import database

    if getattr(database, "engine", None) is not None:
        await database.dispose_engine()
        logger.info("Database engine disposed")
