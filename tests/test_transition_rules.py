"""Tests for the per-stage rule and completion tables."""

from factory_pulse.models.enums import ProjectStage
from factory_pulse.models.project import ProjectSnapshot, SupplierQuoteSnapshot
from factory_pulse.models.workflow import WorkflowValidationResult
from factory_pulse.services.workflow.completion import COMPLETION_CHECKS, reviewers_assigned
from factory_pulse.services.workflow.stages import STAGE_ORDER
from factory_pulse.services.workflow.transition_rules import TRANSITION_RULES


def test_every_stage_has_a_completion_check():
    assert set(COMPLETION_CHECKS) == set(STAGE_ORDER)


def test_rules_govern_only_the_next_stage():
    for current, rule in TRANSITION_RULES.items():
        assert STAGE_ORDER.index(rule.target) == STAGE_ORDER.index(current) + 1


def test_terminal_stage_has_no_rule():
    assert ProjectStage.SHIPPED_CLOSED not in TRANSITION_RULES


def test_reviewers_assigned_needs_all_three():
    snapshot = ProjectSnapshot(status="technical_review", engineering_reviewer_id="a", qa_reviewer_id="b")
    assert reviewers_assigned(snapshot) is False
    snapshot.production_reviewer_id = "c"
    assert reviewers_assigned(snapshot) is True


def test_supplier_rule_counts_only_received_quotes():
    rule = TRANSITION_RULES[ProjectStage.SUPPLIER_RFQ_SENT]
    quotes = [
        SupplierQuoteSnapshot(status="received"),
        SupplierQuoteSnapshot(status="accepted"),
        SupplierQuoteSnapshot(status="received"),
    ]
    result = WorkflowValidationResult()
    rule.check(ProjectSnapshot(status="supplier_rfq_sent"), quotes, result)
    assert result.requires_manager_approval is True
    assert result.warnings == [
        "Not all supplier quotes received (2/3 received). Manager approval required."
    ]


def test_rule_checks_only_append():
    rule = TRANSITION_RULES[ProjectStage.INQUIRY_RECEIVED]
    result = WorkflowValidationResult(warnings=["existing"])
    rule.check(ProjectSnapshot(status="inquiry_received"), None, result)
    assert result.warnings == ["existing", "Project description is recommended"]
    assert result.errors == ["Customer information is required"]
    # is_valid is settled by the validator, not by individual rules
    assert result.is_valid is True
