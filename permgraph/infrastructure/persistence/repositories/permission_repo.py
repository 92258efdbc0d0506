"""Permission repository: the nodes of the dependency graph."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from permgraph.application.dtos.permission import PermissionFilter, PermissionResult
from permgraph.domain.exceptions import PermissionAlreadyExistsException
from permgraph.infrastructure.persistence.models.permission import Permission
from permgraph.infrastructure.persistence.repositories.base import BaseRepository


def _to_result(p: Permission) -> PermissionResult:
    """Map ORM to PermissionResult."""
    return PermissionResult(
        id=p.id,
        name=p.name,
        display_name=p.display_name,
        description=p.description,
        module=p.module,
        type=p.type,
        is_system_permission=p.is_system_permission,
    )


class PermissionRepository(BaseRepository[Permission]):
    """Permission rows as PermissionResult DTOs (IPermissionRepository)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Permission)

    async def get_by_id(self, permission_id: str) -> PermissionResult | None:
        row = await self._get_row(permission_id)
        return _to_result(row) if row else None

    async def get_by_name(self, name: str) -> PermissionResult | None:
        rows = await self._list_rows(Permission.name == name, limit=1)
        return _to_result(rows[0]) if rows else None

    async def list_permissions(
        self,
        permission_filter: PermissionFilter | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[PermissionResult]:
        criteria = []
        if permission_filter is not None:
            if permission_filter.module is not None:
                criteria.append(Permission.module == permission_filter.module)
            if permission_filter.type is not None:
                criteria.append(Permission.type == permission_filter.type)
        rows = await self._list_rows(*criteria, skip=skip, limit=limit)
        return [_to_result(p) for p in rows]

    async def create_permission(
        self,
        name: str,
        display_name: str,
        module: str,
        type: str,
        description: str | None = None,
        is_system_permission: bool = False,
    ) -> PermissionResult:
        """Insert a permission. Raises PermissionAlreadyExistsException on unique name violation."""
        permission = Permission(
            name=name,
            display_name=display_name,
            module=module,
            type=type,
            description=description,
            is_system_permission=is_system_permission,
        )
        try:
            created = await self._insert(permission)
        except IntegrityError:
            raise PermissionAlreadyExistsException(name) from None
        return _to_result(created)

    async def delete_permission(self, permission_id: str) -> bool:
        """Delete by id; dependency rows on either side cascade. False if it did not exist."""
        return await self._delete_where(Permission.id == permission_id) > 0
