"""Per-stage exit rules for the sequential stage transitions.

Each departing stage maps to the one forward transition it governs and a
check that appends errors/warnings to the validation result. Pairs with no
entry here get no stage-specific checks.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from types import MappingProxyType

from factory_pulse.models.enums import ProjectStage, SupplierQuoteStatus
from factory_pulse.models.project import ProjectSnapshot, SupplierQuoteSnapshot
from factory_pulse.models.workflow import WorkflowValidationResult
from factory_pulse.services.workflow.completion import reviewers_assigned

RuleCheck = Callable[
    [ProjectSnapshot, Sequence[SupplierQuoteSnapshot] | None, WorkflowValidationResult],
    None,
]


@dataclass(frozen=True)
class StageRule:
    target: ProjectStage
    check: RuleCheck


def _check_inquiry(project, quotes, result: WorkflowValidationResult) -> None:
    if not project.customer_id:
        result.errors.append("Customer information is required")
    if not project.description:
        result.warnings.append("Project description is recommended")


def _check_technical_review(project, quotes, result: WorkflowValidationResult) -> None:
    if not reviewers_assigned(project):
        result.requires_manager_approval = True
        result.warnings.append(
            "Technical review criteria not fully met. "
            "Manager approval required or complete all reviews."
        )


def _check_supplier_quotes(project, quotes, result: WorkflowValidationResult) -> None:
    if quotes:
        received = sum(1 for q in quotes if q.status == SupplierQuoteStatus.RECEIVED)
        total = len(quotes)
        if received < total:
            result.requires_manager_approval = True
            result.warnings.append(
                f"Not all supplier quotes received ({received}/{total} received). "
                "Manager approval required."
            )
    else:
        result.requires_manager_approval = True
        result.warnings.append("No supplier quotes found. Manager approval required to proceed.")


def _check_quote_value(project, quotes, result: WorkflowValidationResult) -> None:
    if not project.estimated_value:
        result.requires_manager_approval = True
        result.warnings.append("Quote value not set. Manager approval required.")


def _reminder(message: str) -> RuleCheck:
    """Build a check that only adds a non-blocking reminder."""

    def _check(project, quotes, result: WorkflowValidationResult) -> None:
        result.warnings.append(message)

    return _check


TRANSITION_RULES: MappingProxyType[ProjectStage, StageRule] = MappingProxyType({
    ProjectStage.INQUIRY_RECEIVED: StageRule(ProjectStage.TECHNICAL_REVIEW, _check_inquiry),
    ProjectStage.TECHNICAL_REVIEW: StageRule(ProjectStage.SUPPLIER_RFQ_SENT, _check_technical_review),
    ProjectStage.SUPPLIER_RFQ_SENT: StageRule(ProjectStage.QUOTED, _check_supplier_quotes),
    ProjectStage.QUOTED: StageRule(ProjectStage.ORDER_CONFIRMED, _check_quote_value),
    ProjectStage.ORDER_CONFIRMED: StageRule(
        ProjectStage.PROCUREMENT_PLANNING,
        _reminder("Ensure internal sales order is created"),
    ),
    ProjectStage.PROCUREMENT_PLANNING: StageRule(
        ProjectStage.IN_PRODUCTION,
        _reminder("Ensure all procurement and planning tasks are completed"),
    ),
    ProjectStage.IN_PRODUCTION: StageRule(
        ProjectStage.SHIPPED_CLOSED,
        _reminder("Ensure all production tasks are completed and product is shipped"),
    ),
})
