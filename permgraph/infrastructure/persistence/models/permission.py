"""Permission and PermissionDependency ORM models (the dependency graph's nodes and edges)."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    ForeignKey,
    Index,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import false

from permgraph.infrastructure.persistence.database import Base
from permgraph.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    TimestampMixin,
)


class Permission(CuidMixin, TimestampMixin, Base):
    """Permission. Table: permission. Unique name; module/type tags drive auto-resolve."""

    __tablename__ = "permission"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    display_name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    module: Mapped[str] = mapped_column(String(50), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    is_system_permission: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    __table_args__ = (
        UniqueConstraint("name", name="uq_permission_name"),
        Index("ix_permission_module_type", "module", "type"),
    )


class PermissionDependency(CuidMixin, CreatedAtMixin, Base):
    """Directed edge: permission_id requires depends_on_permission_id. Table: permission_dependency."""

    __tablename__ = "permission_dependency"

    permission_id: Mapped[str] = mapped_column(
        String, ForeignKey("permission.id", ondelete="CASCADE"), nullable=False
    )
    depends_on_permission_id: Mapped[str] = mapped_column(
        String, ForeignKey("permission.id", ondelete="CASCADE"), nullable=False
    )
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        UniqueConstraint(
            "permission_id",
            "depends_on_permission_id",
            name="uq_permission_dependency_pair",
        ),
        CheckConstraint(
            "permission_id <> depends_on_permission_id",
            name="ck_permission_dependency_not_self",
        ),
        Index("ix_permission_dependency_depends_on", "depends_on_permission_id"),
    )
