"""PermissionDependency repository: the edge store of the dependency graph."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from permgraph.application.dtos.dependency import DependencyEdgeResult
from permgraph.domain.exceptions import (
    DependencyEndpointMissingException,
    DuplicateDependencyException,
)
from permgraph.infrastructure.persistence.models.permission import PermissionDependency
from permgraph.infrastructure.persistence.repositories.base import BaseRepository
from permgraph.shared.context import get_current_actor_id

# pg_advisory_xact_lock key shared by every graph mutation (ASCII "permgrap").
GRAPH_LOCK_KEY = 0x7065726D67726170

_EDGE_ORDER = (
    PermissionDependency.permission_id,
    PermissionDependency.depends_on_permission_id,
)


def _violated_constraint(exc: IntegrityError) -> str | None:
    """Classify an insert failure as "unique" or "foreign_key" from the driver message.

    PostgreSQL names the constraint; SQLite only names the constraint kind.
    """
    message = str(exc.orig).lower()
    if "uq_permission_dependency_pair" in message or "unique constraint" in message:
        return "unique"
    if "foreign key" in message:
        return "foreign_key"
    return None


def _to_result(e: PermissionDependency) -> DependencyEdgeResult:
    """Map ORM to DependencyEdgeResult."""
    return DependencyEdgeResult(
        id=e.id,
        permission_id=e.permission_id,
        depends_on_permission_id=e.depends_on_permission_id,
        created_at=e.created_at,
        created_by=e.created_by,
    )


class PermissionDependencyRepository(BaseRepository[PermissionDependency]):
    """Dependency edge rows only (IPermissionDependencyRepository). Validation lives in the engine."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, PermissionDependency)

    async def list_edges(
        self,
        permission_id: str | None = None,
        depends_on_permission_id: str | None = None,
    ) -> list[DependencyEdgeResult]:
        criteria = []
        if permission_id is not None:
            criteria.append(PermissionDependency.permission_id == permission_id)
        if depends_on_permission_id is not None:
            criteria.append(
                PermissionDependency.depends_on_permission_id == depends_on_permission_id
            )
        rows = await self._list_rows(*criteria, order_by=_EDGE_ORDER)
        return [_to_result(e) for e in rows]

    async def add_edge(
        self, permission_id: str, depends_on_permission_id: str
    ) -> DependencyEdgeResult:
        """Insert one edge stamped with the current actor.

        Raises:
            DuplicateDependencyException: The pair already exists.
            DependencyEndpointMissingException: An endpoint permission was deleted.
        """
        edge = PermissionDependency(
            permission_id=permission_id,
            depends_on_permission_id=depends_on_permission_id,
            created_by=get_current_actor_id(),
        )
        try:
            created = await self._insert(edge)
        except IntegrityError as exc:
            kind = _violated_constraint(exc)
            if kind == "unique":
                raise DuplicateDependencyException(
                    permission_id, depends_on_permission_id
                ) from None
            if kind == "foreign_key":
                raise DependencyEndpointMissingException(
                    permission_id, depends_on_permission_id
                ) from None
            raise
        return _to_result(created)

    async def remove_edge(self, permission_id: str, depends_on_permission_id: str) -> bool:
        removed = await self._delete_where(
            PermissionDependency.permission_id == permission_id,
            PermissionDependency.depends_on_permission_id == depends_on_permission_id,
        )
        return removed > 0

    async def lock_graph(self) -> None:
        """Take the transaction-scoped graph lock on PostgreSQL; no-op on other dialects."""
        if self.db.get_bind().dialect.name != "postgresql":
            return
        await self.db.execute(select(func.pg_advisory_xact_lock(GRAPH_LOCK_KEY)))
