"""Stage completion predicates.

Only inquiry_received, technical_review and quoted have real checks. The
remaining stages are placeholders that always report complete until the
underlying data (supplier quotes, customer PO, work orders, shipping) is
tracked per stage.
"""

from collections.abc import Callable
from types import MappingProxyType

from factory_pulse.models.enums import ProjectStage
from factory_pulse.models.project import ProjectSnapshot


def reviewers_assigned(project: ProjectSnapshot) -> bool:
    return bool(
        project.engineering_reviewer_id
        and project.qa_reviewer_id
        and project.production_reviewer_id
    )


def _inquiry_complete(project: ProjectSnapshot) -> bool:
    return bool(project.customer_id and project.description)


def _quote_complete(project: ProjectSnapshot) -> bool:
    return bool(project.estimated_value and project.due_date)


def _placeholder(project: ProjectSnapshot) -> bool:
    return True


COMPLETION_CHECKS: MappingProxyType[ProjectStage, Callable[[ProjectSnapshot], bool]] = MappingProxyType({
    ProjectStage.INQUIRY_RECEIVED: _inquiry_complete,
    ProjectStage.TECHNICAL_REVIEW: reviewers_assigned,
    ProjectStage.SUPPLIER_RFQ_SENT: _placeholder,
    ProjectStage.QUOTED: _quote_complete,
    ProjectStage.ORDER_CONFIRMED: _placeholder,
    ProjectStage.PROCUREMENT_PLANNING: _placeholder,
    ProjectStage.IN_PRODUCTION: _placeholder,
    ProjectStage.SHIPPED_CLOSED: _placeholder,
})
