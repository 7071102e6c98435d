"""Workflow validator — decides whether a project may change stage.

All functions are pure: they read the project snapshot (and optional
supplier quotes) passed in and return a judgment. Business conditions such
as missing fields surface as errors/warnings on the result, never as
exceptions. Only an unknown stage identifier raises (InvalidStageError).

Usage:
    from factory_pulse.services.workflow.validator import validate_status_change

    result = validate_status_change(project, "technical_review")
    if result.is_valid and not result.requires_manager_approval:
        ...
"""

from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from factory_pulse.errors.exceptions import ValidationError
from factory_pulse.models.enums import ProjectStage, UserRole
from factory_pulse.models.project import ProjectSnapshot, SupplierQuoteSnapshot
from factory_pulse.models.workflow import (
    AutoAdvanceDecision,
    StageProgress,
    WorkflowValidationResult,
)
from factory_pulse.services.workflow.completion import COMPLETION_CHECKS
from factory_pulse.services.workflow.exit_criteria import get_exit_criteria_for_stage
from factory_pulse.services.workflow.stages import (
    STAGE_ORDER,
    coerce_stage,
    get_stage_index,
    get_stage_name,
    is_backward_movement_allowed,
    stages_between,
)
from factory_pulse.services.workflow.transition_rules import TRANSITION_RULES

BYPASS_ROLES: frozenset[UserRole] = frozenset({UserRole.MANAGEMENT, UserRole.PROCUREMENT_OWNER})


def _invalid_record(label: str, exc: PydanticValidationError) -> ValidationError:
    return ValidationError(
        f"Invalid {label} record",
        details=[{"loc": list(e["loc"]), "msg": e["msg"]} for e in exc.errors()],
    )


def as_project_snapshot(project: Any) -> ProjectSnapshot:
    """Accept a ProjectSnapshot, a mapping, or an ORM row."""
    if isinstance(project, ProjectSnapshot):
        return project
    try:
        return ProjectSnapshot.model_validate(project)
    except PydanticValidationError as exc:
        raise _invalid_record("project", exc) from exc


def as_quote_snapshots(quotes: Sequence[Any] | None) -> list[SupplierQuoteSnapshot] | None:
    if quotes is None:
        return None
    try:
        return [
            q if isinstance(q, SupplierQuoteSnapshot) else SupplierQuoteSnapshot.model_validate(q)
            for q in quotes
        ]
    except PydanticValidationError as exc:
        raise _invalid_record("supplier quote", exc) from exc


def validate_status_change(
    project: Any,
    new_status: ProjectStage | str,
    supplier_quotes: Sequence[Any] | None = None,
) -> WorkflowValidationResult:
    """Validate moving ``project`` from its current stage to ``new_status``.

    1. Backward moves not on the allow-list fail immediately.
    2. A move to the immediate next stage is auto-advanceable when the
       current stage is complete.
    3. Forward jumps over intermediate stages are flagged as needing bypass.
    4. The departing stage's rule runs when the target is the stage it governs.
    5. ``is_valid`` is true iff no errors were recorded.
    """
    snapshot = as_project_snapshot(project)
    target = coerce_stage(new_status)
    current = snapshot.status
    result = WorkflowValidationResult()

    current_idx = get_stage_index(current)
    target_idx = get_stage_index(target)

    if target_idx < current_idx and not is_backward_movement_allowed(current, target):
        result.is_valid = False
        result.errors.append(
            f"Cannot move project backwards from {get_stage_name(current)} to {get_stage_name(target)}"
        )
        return result

    if target_idx == current_idx + 1 and is_stage_complete(snapshot, current):
        result.can_auto_advance = True
        result.auto_advance_reason = (
            f"All exit criteria for {get_stage_name(current)} are met. "
            f"Project can automatically advance to {get_stage_name(target)}."
        )

    if target_idx > current_idx + 1:
        skipped = stages_between(current, target)
        result.bypass_required = True
        result.skipped_stages = skipped
        result.bypass_reason = (
            f"Skipping {', '.join(get_stage_name(s) for s in skipped)} requires manager approval."
        )

    rule = TRANSITION_RULES.get(current)
    if rule is not None and rule.target == target:
        rule.check(snapshot, as_quote_snapshots(supplier_quotes), result)

    result.is_valid = not result.errors
    return result


def is_stage_complete(project: Any, status: ProjectStage | str) -> bool:
    """Stage-level completion. Unknown stage values are never complete."""
    check = COMPLETION_CHECKS.get(status)
    if check is None:
        return False
    return check(as_project_snapshot(project))


def get_next_valid_stages(current_status: ProjectStage | str) -> list[ProjectStage]:
    """All stages after ``current_status``, in workflow order."""
    return list(STAGE_ORDER[get_stage_index(current_status) + 1:])


def can_move_to_stage(project: Any, target_stage: ProjectStage | str) -> bool:
    snapshot = as_project_snapshot(project)
    current_idx = get_stage_index(snapshot.status)
    target_idx = get_stage_index(target_stage)

    if target_idx < current_idx:
        return is_backward_movement_allowed(snapshot.status, target_stage)
    if target_idx > current_idx:
        return is_stage_complete(snapshot, snapshot.status)
    return True


def get_stage_progress(project: Any) -> StageProgress:
    """Stage-level progress report.

    Criterion-level completion is not tracked yet, so every exit criterion
    is reported as pending.
    """
    snapshot = as_project_snapshot(project)
    next_stages = get_next_valid_stages(snapshot.status)
    next_stage = next_stages[0] if next_stages else None
    exit_criteria = get_exit_criteria_for_stage(snapshot.status)

    return StageProgress(
        current_stage=snapshot.status,
        next_stage=next_stage,
        can_advance=can_move_to_stage(snapshot, next_stage) if next_stage else False,
        exit_criteria=exit_criteria,
        completed_criteria=[],
        pending_criteria=list(exit_criteria),
    )


def can_bypass_workflow(user_role: UserRole | str | None) -> bool:
    """Only management and procurement owners may bypass workflow checks."""
    if not user_role:
        return False
    return user_role in BYPASS_ROLES


def check_and_auto_advance(
    project: Any,
    supplier_quotes: Sequence[Any] | None = None,
) -> AutoAdvanceDecision:
    """Recommend whether the project should move to its next stage on its own.

    ``supplier_quotes`` is accepted so callers can pass the same inputs as to
    validate_status_change; stage completion does not consult it.
    """
    snapshot = as_project_snapshot(project)

    if not is_stage_complete(snapshot, snapshot.status):
        return AutoAdvanceDecision(should_advance=False, next_stage=None, reason="Exit criteria not met")

    next_stages = get_next_valid_stages(snapshot.status)
    if not next_stages:
        return AutoAdvanceDecision(should_advance=False, next_stage=None, reason="Already at final stage")

    next_stage = next_stages[0]
    if can_move_to_stage(snapshot, next_stage):
        return AutoAdvanceDecision(
            should_advance=True,
            next_stage=next_stage,
            reason=f"Auto-advancing to {get_stage_name(next_stage)} - all exit criteria met",
        )

    return AutoAdvanceDecision(should_advance=False, next_stage=None, reason="Cannot advance to next stage")
