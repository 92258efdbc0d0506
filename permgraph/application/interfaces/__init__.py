"""Application ports (protocols implemented by infrastructure)."""

from permgraph.application.interfaces.repositories import (
    IPermissionDependencyRepository,
    IPermissionRepository,
)

__all__ = ["IPermissionDependencyRepository", "IPermissionRepository"]
