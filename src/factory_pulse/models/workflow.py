"""Pydantic models for workflow validation results and stage reporting."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from factory_pulse.models.enums import ProjectStage


class WorkflowValidationResult(BaseModel):
    """Outcome of validating one requested stage change.

    Only ``errors`` block a transition. Warnings are advisory and may set
    ``requires_manager_approval``; ``bypass_required`` flags forward jumps
    that skip intermediate stages.
    """

    is_valid: bool = True
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    can_auto_advance: bool = False
    requires_manager_approval: bool = False
    auto_advance_reason: str | None = None
    bypass_required: bool = False
    bypass_reason: str | None = None
    skipped_stages: list[ProjectStage] = Field(default_factory=list)


class StageProgress(BaseModel):
    model_config = ConfigDict(extra="forbid")

    current_stage: ProjectStage
    next_stage: ProjectStage | None = None
    can_advance: bool
    exit_criteria: list[str]
    completed_criteria: list[str]
    pending_criteria: list[str]


class AutoAdvanceDecision(BaseModel):
    model_config = ConfigDict(extra="forbid")

    should_advance: bool
    next_stage: ProjectStage | None = None
    reason: str


class StageDefinition(BaseModel):
    """Display metadata for one stage of the fixed ordering."""

    model_config = ConfigDict(extra="forbid")

    key: ProjectStage
    label: str
    order: int
    exit_criteria: list[str]


class StageValidationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    target_stage: str


class StageTransitionRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    target_stage: str
    changed_by: str = Field(..., min_length=1, max_length=200)
    acting_role: str | None = None
    reason: str | None = Field(None, max_length=2000)


class StageHistoryEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    history_id: str
    project_id: str
    from_stage: ProjectStage | None = None
    to_stage: ProjectStage
    stage_name: str
    changed_by: str
    reason: str | None = None
    bypass_required: bool = False
    bypass_reason: str | None = None
    manager_override: bool = False
    entered_at: datetime
    exited_at: datetime | None = None
    duration_minutes: int | None = None


class StageTransitionStats(BaseModel):
    model_config = ConfigDict(extra="forbid")

    total_transitions: int = 0
    bypass_transitions: int = 0
    stage_transition_counts: dict[str, int] = Field(default_factory=dict)
    average_stage_minutes: dict[str, float] = Field(default_factory=dict)
    bypass_reasons: list[str] = Field(default_factory=list)
