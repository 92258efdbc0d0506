"""Persistence repositories. Re-exports for dependency injection."""

from permgraph.infrastructure.persistence.repositories.base import BaseRepository
from permgraph.infrastructure.persistence.repositories.permission_dependency_repo import (
    PermissionDependencyRepository,
)
from permgraph.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)

__all__ = [
    "BaseRepository",
    "PermissionDependencyRepository",
    "PermissionRepository",
]
