"""Supplier quote table."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from factory_pulse.db.base import Base, TimestampMixin


class SupplierQuoteRow(Base, TimestampMixin):
    __tablename__ = "supplier_quotes"

    quote_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    project_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("projects.project_id"), nullable=False, index=True
    )
    supplier_name: Mapped[str] = mapped_column(String(200), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="sent")
    quote_amount: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    lead_time_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    quote_received_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
