"""Project repository."""

from sqlalchemy.ext.asyncio import AsyncSession

from factory_pulse.db.models.project import ProjectRow
from factory_pulse.repositories.base import BaseRepository


class ProjectRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, ProjectRow)

    async def list_all(self, status: str | None = None) -> list[ProjectRow]:
        criteria = [ProjectRow.status == status] if status else []
        return await self.list_where(*criteria, order_by=(ProjectRow.created_at,))
