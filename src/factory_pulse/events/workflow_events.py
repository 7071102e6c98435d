"""Workflow event emitter — fires when projects are created or change stage."""

import logging

from factory_pulse.events.webhook_emitter import emit_event
from factory_pulse.services.workflow.stages import get_stage_name

logger = logging.getLogger(__name__)

# Event type constants
PROJECT_CREATED = "project.created"
PROJECT_STAGE_CHANGED = "project.stage_changed"


def stage_changed_payload(
    project_id: str,
    from_stage: str | None,
    to_stage: str,
    changed_by: str,
    *,
    manager_override: bool = False,
    auto_advanced: bool = False,
    history_id: str | None = None,
) -> dict:
    return {
        "project_id": project_id,
        "from_stage": from_stage,
        "from_stage_name": get_stage_name(from_stage) if from_stage else None,
        "to_stage": to_stage,
        "to_stage_name": get_stage_name(to_stage),
        "changed_by": changed_by,
        "manager_override": manager_override,
        "auto_advanced": auto_advanced,
        "history_id": history_id,
    }


async def emit_workflow_event(event_type: str, payload: dict) -> list[dict]:
    """Emit a workflow event and log any failed deliveries."""
    results = await emit_event(event_type, payload, project_id=payload.get("project_id"))
    failed = [r for r in results if r["error"]]
    if failed:
        logger.warning(
            "%d of %d webhook deliveries failed for %s",
            len(failed),
            len(results),
            event_type,
        )
    return results
