"""Project table."""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from factory_pulse.db.base import Base, TimestampMixin


class ProjectRow(Base, TimestampMixin):
    __tablename__ = "projects"

    project_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    customer_id: Mapped[str | None] = mapped_column(String(128), nullable=True, index=True)
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default="inquiry_received", index=True
    )
    engineering_reviewer_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    qa_reviewer_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    production_reviewer_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    estimated_value: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    priority: Mapped[str] = mapped_column(String(20), nullable=False, default="medium")
    created_by: Mapped[str] = mapped_column(String(200), nullable=False)
