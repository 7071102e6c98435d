"""Pydantic model for outbound workflow event envelopes."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WebhookEnvelope(BaseModel):
    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+(\.\d+)?$")
    event_type: str
    event_id: str = Field(..., pattern=r"^evt_[a-f0-9]+$")
    occurred_at: datetime
    source_system: str
    project_id: str | None = None
    signature: str | None = None
    payload: dict[str, Any]
