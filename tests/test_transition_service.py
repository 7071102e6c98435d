"""Tests for applying stage transitions to persisted projects."""

from decimal import Decimal

import pytest

from factory_pulse.errors.exceptions import (
    ApprovalRequiredError,
    ConflictError,
    InvalidStageError,
    NotFoundError,
    WorkflowBlockedError,
)
from factory_pulse.repositories.project_repo import ProjectRepository
from factory_pulse.repositories.supplier_quote_repo import SupplierQuoteRepository
from factory_pulse.services.workflow.stage_history import get_project_stage_history
from factory_pulse.services.workflow.transition_service import (
    auto_advance_project,
    transition_project,
    validate_project_transition,
)


async def _create(session, project_id="proj_svc", **fields):
    data = {
        "title": "Gearbox housing",
        "status": "inquiry_received",
        "priority": "medium",
        "created_by": "usr_sales",
    }
    data.update(fields)
    row = await ProjectRepository(session).create(project_id=project_id, **data)
    await session.commit()
    return row


@pytest.mark.asyncio
async def test_validate_project_transition_reads_quotes(db_session):
    await _create(db_session, status="supplier_rfq_sent")
    quotes = SupplierQuoteRepository(db_session)
    await quotes.create(quote_id="quote_1", project_id="proj_svc", supplier_name="Northside", status="received")
    await quotes.create(quote_id="quote_2", project_id="proj_svc", supplier_name="Delta", status="sent")
    await db_session.commit()

    _, result = await validate_project_transition(db_session, "proj_svc", "quoted")
    assert result.requires_manager_approval is True
    assert any("1/2" in w for w in result.warnings)


@pytest.mark.asyncio
async def test_transition_applies_and_records_history(db_session):
    await _create(db_session, customer_id="cust_acme", description="Castings")

    outcome = await transition_project(
        db_session, "proj_svc", "technical_review", changed_by="usr_sales", reason="Inquiry complete"
    )
    assert outcome["previous_stage"] == "inquiry_received"
    assert outcome["new_stage"] == "technical_review"
    assert outcome["manager_override"] is False
    assert outcome["validation"]["can_auto_advance"] is True

    row = await ProjectRepository(db_session).get("proj_svc")
    assert row.status == "technical_review"

    history = await get_project_stage_history(db_session, "proj_svc")
    assert len(history) == 1
    assert history[0].history_id == outcome["history_id"]
    assert history[0].reason == "Inquiry complete"


@pytest.mark.asyncio
async def test_transition_blocked_by_errors(db_session):
    await _create(db_session)
    with pytest.raises(WorkflowBlockedError) as exc_info:
        await transition_project(db_session, "proj_svc", "technical_review", changed_by="usr_sales")
    assert exc_info.value.status_code == 422
    assert "Customer information is required" in exc_info.value.details["errors"]

    row = await ProjectRepository(db_session).get("proj_svc")
    assert row.status == "inquiry_received"


@pytest.mark.asyncio
async def test_errors_block_even_for_managers(db_session):
    await _create(db_session)
    with pytest.raises(WorkflowBlockedError):
        await transition_project(
            db_session, "proj_svc", "technical_review", changed_by="usr_boss", acting_role="management"
        )


@pytest.mark.asyncio
async def test_backward_transition_blocked(db_session):
    await _create(db_session, status="quoted")
    with pytest.raises(WorkflowBlockedError) as exc_info:
        await transition_project(
            db_session, "proj_svc", "inquiry_received", changed_by="usr_boss", acting_role="management"
        )
    assert "backwards" in exc_info.value.message


@pytest.mark.asyncio
async def test_approval_required_for_regular_role(db_session):
    await _create(db_session, status="technical_review", engineering_reviewer_id="usr_eng")
    with pytest.raises(ApprovalRequiredError) as exc_info:
        await transition_project(
            db_session, "proj_svc", "supplier_rfq_sent", changed_by="usr_sales", acting_role="sales"
        )
    assert exc_info.value.details["requires_manager_approval"] is True


@pytest.mark.asyncio
async def test_manager_override(db_session):
    await _create(db_session, status="technical_review", engineering_reviewer_id="usr_eng")
    outcome = await transition_project(
        db_session, "proj_svc", "supplier_rfq_sent", changed_by="usr_boss", acting_role="management"
    )
    assert outcome["manager_override"] is True

    history = await get_project_stage_history(db_session, "proj_svc")
    assert history[-1].manager_override is True


@pytest.mark.asyncio
async def test_skipping_stages_needs_bypass_role(db_session):
    await _create(db_session, customer_id="cust_acme", description="Castings")
    with pytest.raises(ApprovalRequiredError):
        await transition_project(db_session, "proj_svc", "quoted", changed_by="usr_sales")

    outcome = await transition_project(
        db_session, "proj_svc", "quoted", changed_by="usr_po", acting_role="procurement_owner"
    )
    assert outcome["new_stage"] == "quoted"
    history = await get_project_stage_history(db_session, "proj_svc")
    assert history[-1].bypass_required is True
    assert history[-1].bypass_reason.startswith("Skipping Technical Review")


@pytest.mark.asyncio
async def test_transition_to_current_stage_conflicts(db_session):
    await _create(db_session)
    with pytest.raises(ConflictError):
        await transition_project(db_session, "proj_svc", "inquiry_received", changed_by="usr_sales")


@pytest.mark.asyncio
async def test_transition_unknown_project(db_session):
    with pytest.raises(NotFoundError):
        await transition_project(db_session, "proj_missing", "quoted", changed_by="usr_sales")


@pytest.mark.asyncio
async def test_transition_unknown_stage(db_session):
    await _create(db_session)
    with pytest.raises(InvalidStageError):
        await transition_project(db_session, "proj_svc", "archived", changed_by="usr_sales")


@pytest.mark.asyncio
async def test_auto_advance_applies_next_stage(db_session):
    await _create(db_session, customer_id="cust_acme", description="Castings")
    outcome = await auto_advance_project(db_session, "proj_svc")
    assert outcome["advanced"] is True
    assert outcome["decision"]["next_stage"] == "technical_review"
    assert outcome["transition"]["new_stage"] == "technical_review"

    history = await get_project_stage_history(db_session, "proj_svc")
    assert history[-1].changed_by == "system:auto-advance"


@pytest.mark.asyncio
async def test_auto_advance_not_ready(db_session):
    await _create(db_session, customer_id="cust_acme")
    outcome = await auto_advance_project(db_session, "proj_svc")
    assert outcome["advanced"] is False
    assert outcome["decision"]["reason"] == "Exit criteria not met"


@pytest.mark.asyncio
async def test_auto_advance_holds_when_approval_needed(db_session):
    # supplier_rfq_sent is always complete, but no quotes have been received
    await _create(db_session, status="supplier_rfq_sent")
    outcome = await auto_advance_project(db_session, "proj_svc")
    assert outcome["advanced"] is False
    assert outcome["decision"]["reason"] == "Manager approval required before advancing"
    assert outcome["validation"]["requires_manager_approval"] is True

    row = await ProjectRepository(db_session).get("proj_svc")
    assert row.status == "supplier_rfq_sent"


@pytest.mark.asyncio
async def test_auto_advance_at_final_stage(db_session):
    await _create(db_session, status="shipped_closed", estimated_value=Decimal("100"))
    outcome = await auto_advance_project(db_session, "proj_svc")
    assert outcome["advanced"] is False
    assert outcome["decision"]["reason"] == "Already at final stage"
