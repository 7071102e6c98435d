"""Tests for the shared repository helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from factory_pulse.db.models.project import ProjectRow
from factory_pulse.repositories.project_repo import ProjectRepository
from factory_pulse.repositories.stage_history_repo import to_utc
from factory_pulse.repositories.supplier_quote_repo import SupplierQuoteRepository


async def _project(session, project_id, status="inquiry_received"):
    return await ProjectRepository(session).create(
        project_id=project_id,
        title="Bracket run",
        status=status,
        priority="medium",
        created_by="usr_sales",
    )


@pytest.mark.asyncio
async def test_get_by_primary_key(db_session):
    await _project(db_session, "proj_repo")
    await db_session.commit()
    repo = ProjectRepository(db_session)
    assert (await repo.get("proj_repo")).title == "Bracket run"
    assert await repo.get("proj_missing") is None


@pytest.mark.asyncio
async def test_list_where_filters_and_orders(db_session):
    await _project(db_session, "proj_a", status="quoted")
    await _project(db_session, "proj_b")
    await _project(db_session, "proj_c", status="quoted")
    await db_session.commit()

    repo = ProjectRepository(db_session)
    rows = await repo.list_where(ProjectRow.status == "quoted", order_by=(ProjectRow.project_id.desc(),))
    assert [r.project_id for r in rows] == ["proj_c", "proj_a"]
    assert [r.project_id for r in await repo.list_all(status="inquiry_received")] == ["proj_b"]


@pytest.mark.asyncio
async def test_quotes_listed_per_project(db_session):
    await _project(db_session, "proj_a")
    await _project(db_session, "proj_b")
    quotes = SupplierQuoteRepository(db_session)
    await quotes.create(quote_id="quote_1", project_id="proj_a", supplier_name="Northside")
    await quotes.create(quote_id="quote_2", project_id="proj_b", supplier_name="Delta")
    await db_session.commit()

    assert [q.quote_id for q in await quotes.list_by_project("proj_a")] == ["quote_1"]


def test_to_utc_converts_offsets():
    local = datetime(2026, 10, 19, 10, 0, tzinfo=timezone(timedelta(hours=5)))
    assert to_utc(local) == datetime(2026, 10, 19, 5, 0, tzinfo=timezone.utc)
    assert to_utc(local).utcoffset() == timedelta(0)


def test_to_utc_treats_naive_as_utc():
    assert to_utc(datetime(2026, 10, 19, 10, 0)) == datetime(2026, 10, 19, 10, 0, tzinfo=timezone.utc)
