"""DTOs for permission use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PermissionResult:
    """Permission read-model (result of get_by_id, list_permissions, create_permission, etc.)."""

    id: str
    name: str
    display_name: str
    description: str | None
    module: str
    type: str
    is_system_permission: bool


@dataclass(frozen=True)
class PermissionFilter:
    """Request-scoped filter for listing permissions or narrowing graph views.

    None means "all" for that field.
    """

    module: str | None = None
    type: str | None = None

    def matches(self, permission: PermissionResult) -> bool:
        """Return True if permission passes both module and type filters."""
        if self.module is not None and permission.module != self.module:
            return False
        if self.type is not None and permission.type != self.type:
            return False
        return True

    @property
    def is_empty(self) -> bool:
        return self.module is None and self.type is None
