"""Validation tests for the project and workflow models."""

import pytest
from pydantic import ValidationError

from factory_pulse.errors.exceptions import InvalidStageError
from factory_pulse.models.enums import ProjectStage
from factory_pulse.models.project import (
    ProjectCreate,
    ProjectSnapshot,
    ProjectUpdate,
    SupplierQuoteCreate,
    SupplierQuoteUpdate,
)
from factory_pulse.models.workflow import WorkflowValidationResult


def test_project_create_defaults():
    project = ProjectCreate(title="Brackets")
    assert project.project_id is None
    assert project.priority == "medium"
    assert project.created_by == "unknown"


def test_project_create_rejects_bad_id():
    with pytest.raises(ValidationError):
        ProjectCreate(project_id="bracket-1", title="Brackets")


def test_project_create_rejects_negative_value():
    with pytest.raises(ValidationError):
        ProjectCreate(title="Brackets", estimated_value=-1)


def test_project_create_forbids_status():
    with pytest.raises(ValidationError):
        ProjectCreate(title="Brackets", status="quoted")


def test_snapshot_ignores_unrelated_fields():
    snapshot = ProjectSnapshot.model_validate({"status": "quoted", "title": "Brackets", "priority": "high"})
    assert snapshot.status is ProjectStage.QUOTED


def test_snapshot_unknown_status():
    with pytest.raises(InvalidStageError):
        ProjectSnapshot.model_validate({"status": "archived"})


def test_quote_currency_length():
    with pytest.raises(ValidationError):
        SupplierQuoteCreate(supplier_name="Delta", currency="DOLLARS")


def test_validation_result_defaults():
    result = WorkflowValidationResult()
    assert result.is_valid is True
    assert result.errors == []
    assert result.warnings == []
    assert result.requires_manager_approval is False
    assert result.skipped_stages == []


def test_project_update_rejects_null_title():
    with pytest.raises(ValidationError):
        ProjectUpdate(title=None)
    assert ProjectUpdate(description=None).model_dump(exclude_unset=True) == {"description": None}


def test_quote_update_rejects_null_status():
    with pytest.raises(ValidationError):
        SupplierQuoteUpdate(status=None)
