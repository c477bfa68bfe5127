# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Sign-up / sign-in / sign-out proxy to Supabase Auth, plus token
# introspection for the signed-in user.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthSessionResponse, AuthUser, Credentials, UserResponse
from app.dependencies import AuthServiceDep, RecordStoreDep
from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/signup", response_model=AuthSessionResponse)
def sign_up(credentials: Credentials, auth: AuthServiceDep):
    """
    Register with email + password.

    A confirmation email is sent when the project requires one; in that
    case no tokens are returned yet.
    """
    return auth.sign_up(credentials.email, credentials.password)


@router.post("/login", response_model=AuthSessionResponse)
def sign_in(credentials: Credentials, auth: AuthServiceDep):
    """Sign in with email + password and receive access/refresh tokens."""
    return auth.sign_in(credentials.email, credentials.password)


@router.post("/logout")
def sign_out(
    auth: AuthServiceDep,
    user: AuthUser = Depends(get_current_user),
) -> dict:
    """Revoke the current session."""
    auth.sign_out(user.token)
    return {"signed_out": True, "user_id": str(user.id)}


@router.get("/me", response_model=UserResponse)
def get_current_user_info(
    records: RecordStoreDep,
    user: AuthUser = Depends(get_current_user),
) -> UserResponse:
    """
    Get the current authenticated user's profile.

    Falls back to the token claims when the user has no public.users row yet.
    """
    try:
        profile = records.fetch_one("users", {"id": str(user.id)})
        if profile:
            return UserResponse(**profile)
    except SupabaseClientError as e:
        logger.warning(f"Could not fetch user profile: {e}")

    return UserResponse(id=user.id, email=user.email)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """Check that the current token is valid."""
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }
