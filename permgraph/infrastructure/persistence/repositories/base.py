"""Base repository: row helpers for models keyed on a CUID primary key."""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import ColumnElement, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from permgraph.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Shared select/insert/delete over one ORM model.

    Subclasses expose application DTOs; the ORM rows handled here stay in
    the infrastructure layer.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def _get_row(self, entity_id: str) -> ModelType | None:
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def _list_rows(
        self,
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
        skip: int = 0,
        limit: int | None = None,
    ) -> list[ModelType]:
        """Rows matching all criteria, ordered by order_by (primary key when empty)."""
        model: Any = self.model
        stmt = select(self.model).where(*criteria).order_by(*(order_by or (model.id,)))
        if skip:
            stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def _insert(self, obj: ModelType) -> ModelType:
        """Flush a new row and load server defaults (created_at). IntegrityError propagates."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def _delete_where(self, *criteria: ColumnElement[bool]) -> int:
        """Bulk DELETE; foreign-key cascades run in the database. Returns the row count."""
        result = await self.db.execute(delete(self.model).where(*criteria))
        await self.db.flush()
        return result.rowcount or 0
