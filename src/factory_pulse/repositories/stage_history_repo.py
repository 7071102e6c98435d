"""Stage history repository."""

from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from factory_pulse.db.models.stage_history import StageHistoryRow
from factory_pulse.repositories.base import BaseRepository


def to_utc(value: datetime) -> datetime:
    """Normalise to aware UTC. Naive values (as SQLite returns them) are taken as UTC.

    SQLite stores DateTime(timezone=True) values without their offset, so
    everything written or compared must already be in UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class StageHistoryRepository(BaseRepository):
    def __init__(self, session: AsyncSession):
        super().__init__(session, StageHistoryRow)

    async def list_by_project(self, project_id: str) -> list[StageHistoryRow]:
        return await self.list_where(
            StageHistoryRow.project_id == project_id,
            order_by=(StageHistoryRow.entered_at, StageHistoryRow.created_at),
        )

    async def list_between(
        self, date_from: datetime | None = None, date_to: datetime | None = None
    ) -> list[StageHistoryRow]:
        """All history rows, optionally bounded by entered_at, ordered per project."""
        criteria = []
        if date_from:
            criteria.append(StageHistoryRow.entered_at >= to_utc(date_from))
        if date_to:
            criteria.append(StageHistoryRow.entered_at <= to_utc(date_to))
        return await self.list_where(
            *criteria,
            order_by=(StageHistoryRow.project_id, StageHistoryRow.entered_at, StageHistoryRow.created_at),
        )
