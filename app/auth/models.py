# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database. `token` is the raw bearer token so
    sign-out can revoke it.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None
    token: Optional[str] = Field(default=None, repr=False)


class UserResponse(BaseModel):
    """
    Full user response for API endpoints.

    Includes profile data from the public.users table.
    """
    id: UUID
    email: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: Optional[Literal["admin", "manager", "viewer"]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Credentials(BaseModel):
    """Email + password pair for sign-up and sign-in."""
    email: str = Field(..., min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(..., min_length=6, max_length=128)


class AuthSessionResponse(BaseModel):
    """
    Result of sign-up / sign-in.

    Tokens are absent when sign-up needs email confirmation first.
    """
    user_id: Optional[UUID] = None
    email: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    token_type: Optional[str] = None
    confirmation_required: bool = False
