"""Project workflow routes — stage validation, progress, transitions, history."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from factory_pulse.dependencies import get_db
from factory_pulse.models.workflow import (
    StageDefinition,
    StageTransitionRequest,
    StageValidationRequest,
)
from factory_pulse.repositories.supplier_quote_repo import SupplierQuoteRepository
from factory_pulse.services.workflow.exit_criteria import get_exit_criteria_for_stage
from factory_pulse.services.workflow.stage_history import (
    get_project_stage_history,
    get_stage_transition_stats,
)
from factory_pulse.services.workflow.stages import STAGE_ORDER, get_stage_name
from factory_pulse.services.workflow.transition_service import (
    auto_advance_project,
    load_project,
    transition_project,
    validate_project_transition,
)
from factory_pulse.services.workflow.validator import (
    can_bypass_workflow,
    can_move_to_stage,
    check_and_auto_advance,
    get_next_valid_stages,
    get_stage_progress,
)

router = APIRouter(tags=["Workflow"])


@router.get("/workflow/stages")
async def list_stages() -> list[dict]:
    return [
        StageDefinition(
            key=stage,
            label=get_stage_name(stage),
            order=idx,
            exit_criteria=get_exit_criteria_for_stage(stage),
        ).model_dump(mode="json")
        for idx, stage in enumerate(STAGE_ORDER)
    ]


@router.get("/workflow/bypass-check")
async def bypass_check(role: str | None = Query(None)) -> dict:
    return {"role": role, "can_bypass": can_bypass_workflow(role)}


@router.get("/workflow/stats")
async def transition_stats(
    date_from: datetime | None = Query(None),
    date_to: datetime | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> dict:
    stats = await get_stage_transition_stats(db, date_from, date_to)
    return stats.model_dump(mode="json")


@router.post("/projects/{project_id}/workflow/validate")
async def validate_transition(
    project_id: str,
    body: StageValidationRequest,
    db: AsyncSession = Depends(get_db),
) -> dict:
    _, validation = await validate_project_transition(db, project_id, body.target_stage)
    return validation.model_dump(mode="json")


@router.get("/projects/{project_id}/workflow/progress")
async def stage_progress(
    project_id: str,
    db: AsyncSession = Depends(get_db),
) -> dict:
    project = await load_project(db, project_id)
    return get_stage_progress(project).model_dump(mode="json")


@router.get("/projects/{project_id}/workflow/next-stages")
async def next_stages(
    project_id: str,
    db: AsyncSession = Depends(get_db),
) -> dict:
    project = await load_project(db, project_id)
    return {
        "current_stage": project.status,
        "next_stages": [s.value for s in get_next_valid_stages(project.status)],
    }


@router.get("/projects/{project_id}/workflow/can-move")
async def can_move(
    project_id: str,
    target_stage: str = Query(...),
    db: AsyncSession = Depends(get_db),
) -> dict:
    project = await load_project(db, project_id)
    return {
        "current_stage": project.status,
        "target_stage": target_stage,
        "can_move": can_move_to_stage(project, target_stage),
    }


@router.post("/projects/{project_id}/workflow/transition")
async def transition(
    project_id: str,
    body: StageTransitionRequest,
    db: AsyncSession = Depends(get_db),
) -> dict:
    return await transition_project(
        db,
        project_id,
        body.target_stage,
        changed_by=body.changed_by,
        acting_role=body.acting_role,
        reason=body.reason,
    )


@router.post("/projects/{project_id}/workflow/auto-advance/check")
async def auto_advance_check(
    project_id: str,
    db: AsyncSession = Depends(get_db),
) -> dict:
    project = await load_project(db, project_id)
    quotes = await SupplierQuoteRepository(db).list_by_project(project_id)
    return check_and_auto_advance(project, quotes).model_dump(mode="json")


@router.post("/projects/{project_id}/workflow/auto-advance")
async def auto_advance(
    project_id: str,
    db: AsyncSession = Depends(get_db),
) -> dict:
    return await auto_advance_project(db, project_id)


@router.get("/projects/{project_id}/workflow/history")
async def stage_history(
    project_id: str,
    db: AsyncSession = Depends(get_db),
) -> list[dict]:
    await load_project(db, project_id)
    entries = await get_project_stage_history(db, project_id)
    return [e.model_dump(mode="json") for e in entries]
