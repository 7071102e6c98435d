"""Supplier quote repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from factory_pulse.db.models.supplier_quote import SupplierQuoteRow
from factory_pulse.repositories.base import BaseRepository


class SupplierQuoteRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, SupplierQuoteRow)

    async def list_by_project(self, project_id: str) -> list[SupplierQuoteRow]:
        return await self.list_where(
            SupplierQuoteRow.project_id == project_id,
            order_by=(SupplierQuoteRow.created_at,),
        )
