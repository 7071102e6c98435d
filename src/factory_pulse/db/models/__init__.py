"""SQLAlchemy ORM models - import all to register with Base.metadata."""

from factory_pulse.db.models.project import ProjectRow
from factory_pulse.db.models.supplier_quote import SupplierQuoteRow
from factory_pulse.db.models.stage_history import StageHistoryRow

__all__ = [
    "ProjectRow",
    "SupplierQuoteRow",
    "StageHistoryRow",
]
