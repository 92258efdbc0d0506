"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from permgraph.application.dtos.dependency import DependencyEdgeResult
    from permgraph.application.dtos.permission import PermissionFilter, PermissionResult


class IPermissionRepository(Protocol):
    """Protocol for permission repository (DIP)."""

    async def get_by_id(self, permission_id: str) -> PermissionResult | None:
        """Return permission by ID."""

    async def get_by_name(self, name: str) -> PermissionResult | None:
        """Return permission by unique machine name."""

    async def list_permissions(
        self,
        permission_filter: PermissionFilter | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> list[PermissionResult]:
        """Return permissions ordered by id; optional module/type filter and pagination."""

    async def create_permission(
        self,
        name: str,
        display_name: str,
        module: str,
        type: str,
        description: str | None = None,
        is_system_permission: bool = False,
    ) -> PermissionResult:
        """Create a permission."""

    async def delete_permission(self, permission_id: str) -> bool:
        """Delete permission (edges cascade). Return False if not found."""


class IPermissionDependencyRepository(Protocol):
    """Protocol for the dependency edge store (DIP)."""

    async def list_edges(
        self,
        permission_id: str | None = None,
        depends_on_permission_id: str | None = None,
    ) -> list[DependencyEdgeResult]:
        """Return edges (all, or filtered by either endpoint), ordered by endpoint ids."""

    async def add_edge(
        self, permission_id: str, depends_on_permission_id: str
    ) -> DependencyEdgeResult:
        """Insert one edge.

        Raises DuplicateDependencyException on a unique violation and
        DependencyEndpointMissingException when an endpoint permission is gone.
        """

    async def remove_edge(self, permission_id: str, depends_on_permission_id: str) -> bool:
        """Delete one edge. Return False if it did not exist."""

    async def lock_graph(self) -> None:
        """Serialize graph mutations for the rest of the current transaction."""
