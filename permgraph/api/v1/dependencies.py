"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for application services. Services are built
from infrastructure repositories here; routes depend only on these
dependencies, not on infra directly. Read endpoints get a plain session
(get_db); mutations get the request transaction (get_db_transactional).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from permgraph.application.services.dependency_service import DependencyService
from permgraph.application.services.permission_service import PermissionService
from permgraph.application.services.precedence_policy import PrecedencePolicy
from permgraph.core.config import get_settings
from permgraph.infrastructure.persistence.database import get_db, get_db_transactional
from permgraph.infrastructure.persistence.repositories import (
    PermissionDependencyRepository,
    PermissionRepository,
)


def get_precedence_policy(request: Request) -> PrecedencePolicy:
    """Policy validated at startup (app.state); falls back to settings when lifespan did not run."""
    policy = getattr(request.app.state, "precedence_policy", None)
    if policy is None:
        policy = PrecedencePolicy.from_mapping(get_settings().dependency_precedence_policy)
    return policy


def _build_dependency_service(db: AsyncSession, policy: PrecedencePolicy) -> DependencyService:
    settings = get_settings()
    return DependencyService(
        PermissionRepository(db),
        PermissionDependencyRepository(db),
        max_depth_limit=settings.dependency_max_depth_limit,
        visit_limit=settings.dependency_visit_limit,
        policy=policy,
    )


async def get_dependency_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    policy: Annotated[PrecedencePolicy, Depends(get_precedence_policy)],
) -> DependencyService:
    """Dependency service for read-only graph queries."""
    return _build_dependency_service(db, policy)


async def get_dependency_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    policy: Annotated[PrecedencePolicy, Depends(get_precedence_policy)],
) -> DependencyService:
    """Dependency service bound to the request transaction (add, auto-resolve, remove)."""
    return _build_dependency_service(db, policy)


async def get_permission_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PermissionService:
    """Permission service for reads."""
    return PermissionService(PermissionRepository(db), PermissionDependencyRepository(db))


async def get_permission_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> PermissionService:
    """Permission service for writes (transactional)."""
    return PermissionService(PermissionRepository(db), PermissionDependencyRepository(db))
