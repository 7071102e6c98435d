"""Project stage history table — one row per stage entry."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from factory_pulse.db.base import Base, TimestampMixin


class StageHistoryRow(Base, TimestampMixin):
    __tablename__ = "project_stage_history"

    history_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("projects.project_id"), nullable=False, index=True
    )
    # NULL when the project was created directly into to_stage
    from_stage: Mapped[str | None] = mapped_column(String(50), nullable=True)
    to_stage: Mapped[str] = mapped_column(String(50), nullable=False)
    changed_by: Mapped[str] = mapped_column(String(200), nullable=False)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    bypass_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    bypass_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    manager_override: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    entered_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
