# =============================================================================
# core/models/workflow.py - Workflow Schemas
# =============================================================================
# A workflow is a reusable onboarding plan with a nominal duration.
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class WorkflowStatus(str, Enum):
    """
    Possible states for a workflow.

    No transition rules: any status may be set directly.
    """
    DRAFT = "draft"
    ACTIVE = "active"
    ARCHIVED = "archived"


class WorkflowCreate(BaseModel):
    """
    Schema for creating a workflow.

    Example:
        {"name": "Standard onboarding", "duration_days": 30, "status": "active"}
    """

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    duration_days: int = Field(default=30, ge=0, le=3650)
    status: WorkflowStatus = Field(default=WorkflowStatus.ACTIVE)


class WorkflowUpdate(BaseModel):
    """Partial update; only fields present in the request are written."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=5000)
    duration_days: int | None = Field(default=None, ge=0, le=3650)
    status: WorkflowStatus | None = None


class WorkflowResponse(BaseModel):
    """A workflow row as returned to API callers."""

    id: UUID
    name: str
    description: str | None = None
    duration_days: int = 0
    status: WorkflowStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
