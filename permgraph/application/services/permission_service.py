"""Permission application service: create with validation, delete with dependency checks."""

from __future__ import annotations

from permgraph.application.dtos.permission import PermissionFilter, PermissionResult
from permgraph.application.interfaces.repositories import (
    IPermissionDependencyRepository,
    IPermissionRepository,
)
from permgraph.domain.exceptions import (
    PermissionAlreadyExistsException,
    PermissionInUseException,
    ResourceNotFoundException,
    SystemPermissionException,
    ValidationException,
)
from permgraph.domain.value_objects import PermissionName, PermissionTag
from permgraph.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class PermissionService:
    """Create, read and delete permissions (the nodes of the dependency graph)."""

    def __init__(
        self,
        permission_repo: IPermissionRepository,
        dependency_repo: IPermissionDependencyRepository,
    ) -> None:
        self._repo = permission_repo
        self._edges = dependency_repo

    async def create_permission(
        self,
        name: str,
        display_name: str,
        module: str,
        type: str,
        description: str | None = None,
        is_system_permission: bool = False,
    ) -> PermissionResult:
        """Create permission. Raises PermissionAlreadyExistsException if the name is taken."""
        try:
            PermissionName(name)
            PermissionTag(module)
            PermissionTag(type)
        except ValueError as exc:
            raise ValidationException(str(exc)) from exc
        # Duplicate check is best-effort; the repository maps the unique violation too.
        if await self._repo.get_by_name(name):
            raise PermissionAlreadyExistsException(name)
        created = await self._repo.create_permission(
            name=name,
            display_name=display_name,
            module=module,
            type=type,
            description=description,
            is_system_permission=is_system_permission,
        )
        logger.info("Permission created: %s (%s)", created.name, created.id)
        return created

    async def get_permission(self, permission_id: str) -> PermissionResult:
        """Return permission. Raises ResourceNotFoundException."""
        permission = await self._repo.get_by_id(permission_id)
        if permission is None:
            raise ResourceNotFoundException("permission", permission_id)
        return permission

    async def list_permissions(
        self,
        permission_filter: PermissionFilter | None = None,
        skip: int = 0,
        limit: int | None = 100,
    ) -> list[PermissionResult]:
        return await self._repo.list_permissions(permission_filter, skip=skip, limit=limit)

    async def delete_permission(self, permission_id: str) -> None:
        """Delete a permission and its own outgoing edges.

        Raises:
            ResourceNotFoundException: Unknown id.
            SystemPermissionException: Seed-defined permission.
            PermissionInUseException: Other permissions still depend on it.
        """
        permission = await self.get_permission(permission_id)
        if permission.is_system_permission:
            raise SystemPermissionException(permission_id)
        await self._edges.lock_graph()
        dependents = await self._edges.list_edges(depends_on_permission_id=permission_id)
        if dependents:
            raise PermissionInUseException(
                permission_id, sorted({e.permission_id for e in dependents})
            )
        await self._repo.delete_permission(permission_id)
        logger.info("Permission deleted: %s (%s)", permission.name, permission_id)
