"""Project CRUD API routes."""

import logging

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from factory_pulse.dependencies import get_db
from factory_pulse.errors.exceptions import ConflictError, NotFoundError
from factory_pulse.events.workflow_events import PROJECT_CREATED, emit_workflow_event, stage_changed_payload
from factory_pulse.models.enums import ProjectStage
from factory_pulse.models.project import Project, ProjectCreate, ProjectUpdate
from factory_pulse.repositories.project_repo import ProjectRepository
from factory_pulse.services.id_generator import generate_id
from factory_pulse.services.workflow.stage_history import record_stage_transition
from factory_pulse.services.workflow.stages import STAGE_ORDER

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Projects"])


def _serialize(row) -> dict:
    return Project.model_validate(row).model_dump(mode="json")


@router.post("/projects", status_code=201)
async def create_project(
    body: ProjectCreate,
    db: AsyncSession = Depends(get_db),
) -> dict:
    repo = ProjectRepository(db)
    project_id = body.project_id or generate_id("proj_")

    if await repo.get(project_id):
        raise ConflictError(f"Project '{project_id}' already exists")

    initial_stage = STAGE_ORDER[0]
    row = await repo.create(
        project_id=project_id,
        status=initial_stage.value,
        **body.model_dump(exclude={"project_id"}),
    )
    await record_stage_transition(
        db,
        project_id=project_id,
        from_stage=None,
        to_stage=initial_stage.value,
        changed_by=body.created_by,
        reason="Project creation",
    )
    await db.commit()
    logger.info("Project %s created at %s", project_id, initial_stage)

    await emit_workflow_event(
        PROJECT_CREATED,
        stage_changed_payload(project_id, None, initial_stage.value, body.created_by),
    )
    return _serialize(row)


@router.get("/projects")
async def list_projects(
    status: ProjectStage | None = Query(None),
    db: AsyncSession = Depends(get_db),
) -> list[dict]:
    rows = await ProjectRepository(db).list_all(status=status.value if status else None)
    return [_serialize(r) for r in rows]


@router.get("/projects/{project_id}")
async def get_project(
    project_id: str,
    db: AsyncSession = Depends(get_db),
) -> dict:
    row = await ProjectRepository(db).get(project_id)
    if not row:
        raise NotFoundError("Project", project_id)
    return _serialize(row)


@router.patch("/projects/{project_id}")
async def update_project(
    project_id: str,
    body: ProjectUpdate,
    db: AsyncSession = Depends(get_db),
) -> dict:
    repo = ProjectRepository(db)
    row = await repo.get(project_id)
    if not row:
        raise NotFoundError("Project", project_id)

    await repo.update(row, **body.model_dump(exclude_unset=True))
    await db.commit()
    return _serialize(row)
