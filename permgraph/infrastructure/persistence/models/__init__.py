"""ORM models. Import here so Base.metadata sees every table (Alembic, create_all)."""

from permgraph.infrastructure.persistence.models.permission import (
    Permission,
    PermissionDependency,
)

__all__ = ["Permission", "PermissionDependency"]
