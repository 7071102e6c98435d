"""Pydantic models for projects and supplier quotes."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from factory_pulse.models.enums import ProjectPriority, ProjectStage, SupplierQuoteStatus
from factory_pulse.services.workflow.stages import coerce_stage


class ProjectSnapshot(BaseModel):
    """Read-only view of a project as handed to the workflow validator."""

    model_config = ConfigDict(extra="ignore", from_attributes=True)

    status: ProjectStage
    customer_id: str | None = None
    description: str | None = None
    engineering_reviewer_id: str | None = None
    qa_reviewer_id: str | None = None
    production_reviewer_id: str | None = None
    estimated_value: Decimal | None = None
    due_date: date | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _known_stage(cls, value):
        return coerce_stage(value)


class SupplierQuoteSnapshot(BaseModel):
    """Only the status of a quote matters to the validator."""

    model_config = ConfigDict(extra="ignore", from_attributes=True)

    status: str


class ProjectCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    project_id: str | None = Field(None, pattern=r"^proj_[A-Za-z0-9_-]+$")
    title: str = Field(..., min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    customer_id: str | None = None
    engineering_reviewer_id: str | None = None
    qa_reviewer_id: str | None = None
    production_reviewer_id: str | None = None
    estimated_value: Decimal | None = Field(None, ge=0)
    due_date: date | None = None
    priority: ProjectPriority = ProjectPriority.MEDIUM
    created_by: str = "unknown"


class ProjectUpdate(BaseModel):
    """Partial update. Stage changes go through the workflow endpoints."""

    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    customer_id: str | None = None
    engineering_reviewer_id: str | None = None
    qa_reviewer_id: str | None = None
    production_reviewer_id: str | None = None
    estimated_value: Decimal | None = Field(None, ge=0)
    due_date: date | None = None
    priority: ProjectPriority | None = None

    @field_validator("title", "priority")
    @classmethod
    def _not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not set to null")
        return value


class Project(BaseModel):
    model_config = ConfigDict(extra="forbid", from_attributes=True)

    project_id: str
    title: str
    description: str | None = None
    customer_id: str | None = None
    status: ProjectStage
    engineering_reviewer_id: str | None = None
    qa_reviewer_id: str | None = None
    production_reviewer_id: str | None = None
    estimated_value: Decimal | None = None
    due_date: date | None = None
    priority: ProjectPriority
    created_by: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SupplierQuoteCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    supplier_name: str = Field(..., min_length=1, max_length=200)
    status: SupplierQuoteStatus = SupplierQuoteStatus.SENT
    quote_amount: Decimal | None = Field(None, ge=0)
    currency: str = Field("USD", min_length=3, max_length=3)
    lead_time_days: int | None = Field(None, ge=0)


class SupplierQuoteUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: SupplierQuoteStatus | None = None
    quote_amount: Decimal | None = Field(None, ge=0)
    lead_time_days: int | None = Field(None, ge=0)

    @field_validator("status")
    @classmethod
    def _status_not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not set to null")
        return value


class SupplierQuote(BaseModel):
    model_config = ConfigDict(extra="forbid", from_attributes=True)

    quote_id: str
    project_id: str
    supplier_name: str
    status: SupplierQuoteStatus
    quote_amount: Decimal | None = None
    currency: str
    lead_time_days: int | None = None
    quote_received_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
