"""Supplier quote routes — the RFQ responses consulted by the workflow."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from factory_pulse.dependencies import get_db
from factory_pulse.errors.exceptions import NotFoundError
from factory_pulse.models.enums import SupplierQuoteStatus
from factory_pulse.models.project import SupplierQuote, SupplierQuoteCreate, SupplierQuoteUpdate
from factory_pulse.repositories.project_repo import ProjectRepository
from factory_pulse.repositories.supplier_quote_repo import SupplierQuoteRepository
from factory_pulse.services.id_generator import generate_id

router = APIRouter(tags=["Supplier Quotes"])


def _serialize(row) -> dict:
    return SupplierQuote.model_validate(row).model_dump(mode="json")


@router.post("/projects/{project_id}/supplier-quotes", status_code=201)
async def create_supplier_quote(
    project_id: str,
    body: SupplierQuoteCreate,
    db: AsyncSession = Depends(get_db),
) -> dict:
    if not await ProjectRepository(db).get(project_id):
        raise NotFoundError("Project", project_id)

    received_at = datetime.now(timezone.utc) if body.status == SupplierQuoteStatus.RECEIVED else None
    row = await SupplierQuoteRepository(db).create(
        quote_id=generate_id("quote_"),
        project_id=project_id,
        quote_received_at=received_at,
        **body.model_dump(),
    )
    await db.commit()
    return _serialize(row)


@router.get("/projects/{project_id}/supplier-quotes")
async def list_supplier_quotes(
    project_id: str,
    db: AsyncSession = Depends(get_db),
) -> list[dict]:
    if not await ProjectRepository(db).get(project_id):
        raise NotFoundError("Project", project_id)
    rows = await SupplierQuoteRepository(db).list_by_project(project_id)
    return [_serialize(r) for r in rows]


@router.patch("/supplier-quotes/{quote_id}")
async def update_supplier_quote(
    quote_id: str,
    body: SupplierQuoteUpdate,
    db: AsyncSession = Depends(get_db),
) -> dict:
    repo = SupplierQuoteRepository(db)
    row = await repo.get(quote_id)
    if not row:
        raise NotFoundError("Supplier quote", quote_id)

    changes = body.model_dump(exclude_unset=True)
    if changes.get("status") == SupplierQuoteStatus.RECEIVED and row.status != SupplierQuoteStatus.RECEIVED:
        changes["quote_received_at"] = datetime.now(timezone.utc)
    await repo.update(row, **changes)
    await db.commit()
    return _serialize(row)
