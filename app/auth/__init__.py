# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Supabase Auth integration: JWT verification for protected routes and the
# sign-up / sign-in / sign-out endpoints.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser, UserResponse

__all__ = [
    "get_current_user",
    "AuthUser",
    "UserResponse",
]
