# =============================================================================
# core/models/client.py - Client Schemas
# =============================================================================
# A client is an organisation being onboarded. Pure CRUD: the only rule is
# the closed status enumeration, and any status may be set to any other.
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class ClientStatus(str, Enum):
    """
    Lifecycle of a client engagement.

    - active: Onboarding in progress
    - paused: On hold
    - completed: Onboarding finished
    """
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class ClientCreate(BaseModel):
    """
    Schema for creating a client.

    Example:
        {
            "name": "Acme Corp",
            "email": "ops@acme.test",
            "company": "Acme",
            "industry": "Manufacturing",
            "status": "active"
        }
    """

    name: str = Field(..., min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    company: str | None = Field(default=None, max_length=255)
    industry: str | None = Field(default=None, max_length=255)
    status: ClientStatus = Field(default=ClientStatus.ACTIVE)

    # Optional profile fields
    logo_url: str | None = None
    brand_color: str | None = Field(default=None, max_length=32)
    primary_contact_name: str | None = None
    primary_contact_email: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None


class ClientUpdate(BaseModel):
    """Partial update; only fields present in the request are written."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: str | None = Field(default=None, max_length=255)
    company: str | None = Field(default=None, max_length=255)
    industry: str | None = Field(default=None, max_length=255)
    status: ClientStatus | None = None
    logo_url: str | None = None
    brand_color: str | None = Field(default=None, max_length=32)
    primary_contact_name: str | None = None
    primary_contact_email: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None


class ClientResponse(BaseModel):
    """A client row as returned to API callers."""

    id: UUID
    name: str
    email: str | None = None
    company: str | None = None
    industry: str | None = None
    status: ClientStatus
    logo_url: str | None = None
    brand_color: str | None = None
    primary_contact_name: str | None = None
    primary_contact_email: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None
    created_by: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
