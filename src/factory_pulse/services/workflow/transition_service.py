"""Applies validated stage transitions to persisted projects.

The validator decides; this service enforces the decision, writes the new
stage, records history and emits the stage-changed event. Transitions that
need manager approval or skip stages go through only for roles allowed to
bypass the workflow. No approval request is created for other roles; the
caller gets ApprovalRequiredError instead.
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from factory_pulse.config import settings
from factory_pulse.db.models.project import ProjectRow
from factory_pulse.errors.exceptions import (
    ApprovalRequiredError,
    ConflictError,
    NotFoundError,
    WorkflowBlockedError,
)
from factory_pulse.events.workflow_events import (
    PROJECT_STAGE_CHANGED,
    emit_workflow_event,
    stage_changed_payload,
)
from factory_pulse.models.enums import ProjectStage
from factory_pulse.models.workflow import AutoAdvanceDecision, WorkflowValidationResult
from factory_pulse.repositories.project_repo import ProjectRepository
from factory_pulse.repositories.supplier_quote_repo import SupplierQuoteRepository
from factory_pulse.services.workflow.stage_history import record_stage_transition
from factory_pulse.services.workflow.stages import coerce_stage, get_stage_name
from factory_pulse.services.workflow.validator import (
    can_bypass_workflow,
    check_and_auto_advance,
    validate_status_change,
)

logger = logging.getLogger(__name__)


async def load_project(session: AsyncSession, project_id: str) -> ProjectRow:
    row = await ProjectRepository(session).get(project_id)
    if not row:
        raise NotFoundError("Project", project_id)
    return row


async def validate_project_transition(
    session: AsyncSession, project_id: str, target_stage: ProjectStage | str
) -> tuple[ProjectRow, WorkflowValidationResult]:
    """Validate a transition against the stored project and its supplier quotes."""
    project = await load_project(session, project_id)
    quotes = await SupplierQuoteRepository(session).list_by_project(project_id)
    return project, validate_status_change(project, target_stage, quotes)


async def _apply(
    session: AsyncSession,
    project: ProjectRow,
    target: ProjectStage,
    validation: WorkflowValidationResult,
    *,
    changed_by: str,
    reason: str | None,
    manager_override: bool,
    auto_advanced: bool = False,
) -> dict:
    previous = project.status
    await ProjectRepository(session).update(
        project, status=target.value, updated_at=datetime.now(timezone.utc)
    )
    history = await record_stage_transition(
        session,
        project_id=project.project_id,
        from_stage=previous,
        to_stage=target.value,
        changed_by=changed_by,
        reason=reason,
        bypass_required=validation.bypass_required,
        bypass_reason=validation.bypass_reason,
        manager_override=manager_override,
    )
    await session.commit()

    await emit_workflow_event(
        PROJECT_STAGE_CHANGED,
        stage_changed_payload(
            project.project_id,
            previous,
            target.value,
            changed_by,
            manager_override=manager_override,
            auto_advanced=auto_advanced,
            history_id=history.history_id,
        ),
    )

    return {
        "project_id": project.project_id,
        "previous_stage": previous,
        "new_stage": target.value,
        "manager_override": manager_override,
        "history_id": history.history_id,
        "validation": validation.model_dump(mode="json"),
    }


async def transition_project(
    session: AsyncSession,
    project_id: str,
    target_stage: ProjectStage | str,
    *,
    changed_by: str,
    acting_role: str | None = None,
    reason: str | None = None,
) -> dict:
    """Move a project to ``target_stage``.

    Raises:
        InvalidStageError: target is not a workflow stage.
        NotFoundError: project does not exist.
        ConflictError: project is already at the target stage.
        WorkflowBlockedError: the validator reported errors.
        ApprovalRequiredError: approval or bypass needed and the role cannot bypass.
    """
    target = coerce_stage(target_stage)
    project, validation = await validate_project_transition(session, project_id, target)

    if project.status == target:
        raise ConflictError(f"Project '{project_id}' is already at {get_stage_name(target)}")

    details = validation.model_dump(mode="json")
    if not validation.is_valid:
        logger.info("Transition %s -> %s blocked for %s: %s", project.status, target, project_id, validation.errors)
        raise WorkflowBlockedError("; ".join(validation.errors), details=details)

    needs_override = validation.requires_manager_approval or validation.bypass_required
    if needs_override and not can_bypass_workflow(acting_role):
        raise ApprovalRequiredError(
            f"Moving to {get_stage_name(target)} requires management or procurement owner approval",
            details=details,
        )

    return await _apply(
        session,
        project,
        target,
        validation,
        changed_by=changed_by,
        reason=reason,
        manager_override=needs_override,
    )


async def auto_advance_project(session: AsyncSession, project_id: str) -> dict:
    """Advance the project one stage when nothing stands in the way.

    Auto-advance never takes the bypass path: a step that needs manager
    approval is reported but not applied.
    """
    project = await load_project(session, project_id)
    quotes = await SupplierQuoteRepository(session).list_by_project(project_id)
    decision = check_and_auto_advance(project, quotes)

    if not decision.should_advance:
        return {"advanced": False, "decision": decision.model_dump(mode="json")}

    validation = validate_status_change(project, decision.next_stage, quotes)
    if not validation.is_valid or validation.requires_manager_approval:
        held = AutoAdvanceDecision(
            should_advance=False,
            next_stage=decision.next_stage,
            reason="Manager approval required before advancing"
            if validation.is_valid
            else "; ".join(validation.errors),
        )
        return {
            "advanced": False,
            "decision": held.model_dump(mode="json"),
            "validation": validation.model_dump(mode="json"),
        }

    transition = await _apply(
        session,
        project,
        decision.next_stage,
        validation,
        changed_by=settings.auto_advance_actor,
        reason=decision.reason,
        manager_override=False,
        auto_advanced=True,
    )
    logger.info("Auto-advanced %s to %s", project_id, decision.next_stage)
    return {"advanced": True, "decision": decision.model_dump(mode="json"), "transition": transition}
