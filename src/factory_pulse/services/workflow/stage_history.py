"""Stage history — records stage entries and derives durations and stats."""

import logging
from collections import defaultdict
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from factory_pulse.db.models.stage_history import StageHistoryRow
from factory_pulse.models.workflow import StageHistoryEntry, StageTransitionStats
from factory_pulse.repositories.stage_history_repo import StageHistoryRepository, to_utc
from factory_pulse.services.id_generator import generate_id
from factory_pulse.services.workflow.stages import get_stage_name

logger = logging.getLogger(__name__)


def _minutes_between(start: datetime, end: datetime) -> int:
    return round((to_utc(end) - to_utc(start)).total_seconds() / 60)


async def record_stage_transition(
    session: AsyncSession,
    *,
    project_id: str,
    from_stage: str | None,
    to_stage: str,
    changed_by: str,
    reason: str | None = None,
    bypass_required: bool = False,
    bypass_reason: str | None = None,
    manager_override: bool = False,
    entered_at: datetime | None = None,
) -> StageHistoryRow:
    row = await StageHistoryRepository(session).create(
        history_id=generate_id("stghist_"),
        project_id=project_id,
        from_stage=from_stage,
        to_stage=to_stage,
        changed_by=changed_by,
        reason=reason,
        bypass_required=bypass_required,
        bypass_reason=bypass_reason,
        manager_override=manager_override,
        entered_at=to_utc(entered_at) if entered_at else datetime.now(timezone.utc),
    )
    logger.info(
        "Stage transition recorded for %s: %s -> %s by %s%s",
        project_id,
        get_stage_name(from_stage) if from_stage else "(new)",
        get_stage_name(to_stage),
        changed_by,
        " (manager override)" if manager_override else "",
    )
    return row


def build_history(rows: list[StageHistoryRow]) -> list[StageHistoryEntry]:
    """Turn ordered rows into entries; each stage is exited when the next one is entered."""
    entries = []
    for idx, row in enumerate(rows):
        following = rows[idx + 1] if idx + 1 < len(rows) else None
        entries.append(StageHistoryEntry(
            history_id=row.history_id,
            project_id=row.project_id,
            from_stage=row.from_stage,
            to_stage=row.to_stage,
            stage_name=get_stage_name(row.to_stage),
            changed_by=row.changed_by,
            reason=row.reason,
            bypass_required=row.bypass_required,
            bypass_reason=row.bypass_reason,
            manager_override=row.manager_override,
            entered_at=to_utc(row.entered_at),
            exited_at=to_utc(following.entered_at) if following else None,
            duration_minutes=_minutes_between(row.entered_at, following.entered_at) if following else None,
        ))
    return entries


async def get_project_stage_history(session: AsyncSession, project_id: str) -> list[StageHistoryEntry]:
    rows = await StageHistoryRepository(session).list_by_project(project_id)
    return build_history(rows)


async def get_stage_transition_stats(
    session: AsyncSession,
    date_from: datetime | None = None,
    date_to: datetime | None = None,
) -> StageTransitionStats:
    """Aggregate transition counts, bypass usage and average time per stage.

    Creation entries (no from_stage) count toward stage time but not
    toward transitions.
    """
    rows = await StageHistoryRepository(session).list_between(date_from, date_to)

    by_project: dict[str, list[StageHistoryRow]] = defaultdict(list)
    for row in rows:
        by_project[row.project_id].append(row)

    stats = StageTransitionStats()
    durations: dict[str, list[int]] = defaultdict(list)

    for project_rows in by_project.values():
        for entry in build_history(project_rows):
            stage = entry.to_stage.value
            if entry.duration_minutes is not None:
                durations[stage].append(entry.duration_minutes)
            if entry.from_stage is None:
                continue
            stats.total_transitions += 1
            stats.stage_transition_counts[stage] = stats.stage_transition_counts.get(stage, 0) + 1
            if entry.bypass_required or entry.manager_override:
                stats.bypass_transitions += 1
                if entry.bypass_reason:
                    stats.bypass_reasons.append(entry.bypass_reason)

    stats.average_stage_minutes = {
        stage: round(sum(values) / len(values), 1) for stage, values in durations.items()
    }
    return stats
