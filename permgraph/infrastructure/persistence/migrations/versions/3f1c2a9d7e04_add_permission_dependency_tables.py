"""add_permission_dependency_tables

Revision ID: 3f1c2a9d7e04
Revises:
Create Date: 2026-10-19 09:12:44.318207

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7e04"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema - add permission and permission_dependency tables."""

    op.create_table(
        "permission",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("display_name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("module", sa.String(length=50), nullable=False),
        sa.Column("type", sa.String(length=50), nullable=False),
        sa.Column(
            "is_system_permission",
            sa.Boolean(),
            nullable=False,
            server_default=sa.false(),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_permission_name"),
    )
    op.create_index("ix_permission_module_type", "permission", ["module", "type"])

    # Edge table: permission_id requires depends_on_permission_id
    op.create_table(
        "permission_dependency",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("permission_id", sa.String(), nullable=False),
        sa.Column("depends_on_permission_id", sa.String(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column("created_by", sa.String(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["permission_id"], ["permission.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(
            ["depends_on_permission_id"], ["permission.id"], ondelete="CASCADE"
        ),
        sa.UniqueConstraint(
            "permission_id",
            "depends_on_permission_id",
            name="uq_permission_dependency_pair",
        ),
        sa.CheckConstraint(
            "permission_id <> depends_on_permission_id",
            name="ck_permission_dependency_not_self",
        ),
    )
    op.create_index(
        "ix_permission_dependency_depends_on",
        "permission_dependency",
        ["depends_on_permission_id"],
    )


def downgrade() -> None:
    """Downgrade schema - drop permission dependency tables."""
    op.drop_index("ix_permission_dependency_depends_on", table_name="permission_dependency")
    op.drop_table("permission_dependency")
    op.drop_index("ix_permission_module_type", table_name="permission")
    op.drop_table("permission")
