"""Display-only exit criteria per stage.

These strings are shown to users as the checklist for leaving a stage.
Machine-checked completion lives in ``completion.py``.
"""

from types import MappingProxyType

from factory_pulse.models.enums import ProjectStage

DEFAULT_EXIT_CRITERIA = MappingProxyType({
    ProjectStage.INQUIRY_RECEIVED: (
        "Customer information captured",
        "Project description provided",
    ),
    ProjectStage.TECHNICAL_REVIEW: (
        "Engineering review completed",
        "QA inspection requirements defined",
        "Production process evaluation completed",
    ),
    ProjectStage.SUPPLIER_RFQ_SENT: (
        "BOM breakdown completed",
        "Suppliers selected",
        "RFQs sent to all suppliers",
    ),
    ProjectStage.QUOTED: (
        "All supplier quotes received",
        "Internal costing finalized",
        "Quote document generated",
    ),
    ProjectStage.ORDER_CONFIRMED: (
        "Customer PO received",
        "Internal sales order created",
    ),
    ProjectStage.PROCUREMENT_PLANNING: (
        "Purchase orders finalized",
        "Production schedule confirmed",
        "Raw materials inventory confirmed",
    ),
    ProjectStage.IN_PRODUCTION: (
        "Work order released",
        "Manufacturing started",
    ),
    ProjectStage.SHIPPED_CLOSED: (
        "Product shipped",
        "Proof of delivery received",
        "Customer feedback collected",
    ),
})


def get_exit_criteria_for_stage(stage: ProjectStage | str) -> list[str]:
    """Return a fresh list of criteria; empty for unknown stages."""
    return list(DEFAULT_EXIT_CRITERIA.get(stage, ()))
