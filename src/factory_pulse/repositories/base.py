"""Async repository base shared by the project, quote and stage history tables."""

from typing import Any, TypeVar

from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession

from factory_pulse.db.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository:
    """Primary-key lookup, filtered listing and flush-on-write for one ORM model."""

    def __init__(self, session: AsyncSession, model_class: type[T]):
        self.session = session
        self.model_class = model_class

    async def get(self, pk_value: str) -> T | None:
        return await self.session.get(self.model_class, pk_value)

    async def list_where(
        self,
        *criteria: ColumnElement[bool],
        order_by: tuple = (),
    ) -> list[T]:
        """Rows matching every criterion, in ``order_by`` order."""
        stmt = select(self.model_class).where(*criteria).order_by(*order_by)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, **kwargs: Any) -> T:
        row = self.model_class(**kwargs)
        self.session.add(row)
        await self.session.flush()
        return row

    async def update(self, row: T, **kwargs: Any) -> T:
        """Assign column values and flush; the caller owns the commit."""
        for key, value in kwargs.items():
            setattr(row, key, value)
        await self.session.flush()
        return row
