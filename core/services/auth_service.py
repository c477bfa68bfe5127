# =============================================================================
# core/services/auth_service.py - Identity Gateway
# =============================================================================
# Email + password sign-up / sign-in / sign-out against Supabase Auth, plus
# a subscription hook for auth state changes (SIGNED_IN, SIGNED_OUT, ...).
#
# Each sign-up / sign-in runs on a fresh anon-key client so one user's
# session never lands on the shared service-role client.
# =============================================================================

import logging
from typing import Any, Callable

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid
from app.config import settings
from app.exceptions import AuthenticationError

logger = logging.getLogger(__name__)

# (event, session) -> None
AuthListener = Callable[[str, Any], None]


def _session_payload(response: Any) -> dict[str, Any]:
    """Flatten a supabase AuthResponse into what the API returns."""
    user = getattr(response, "user", None)
    session = getattr(response, "session", None)

    return {
        "user_id": normalize_uuid(user.id) if user else None,
        "email": getattr(user, "email", None),
        "access_token": getattr(session, "access_token", None),
        "refresh_token": getattr(session, "refresh_token", None),
        "expires_at": getattr(session, "expires_at", None),
        "token_type": getattr(session, "token_type", None),
        "confirmation_required": session is None,
    }


class AuthService:
    """
    Gateway to the external identity service.

    Example:
        unsubscribe = auth_service.subscribe(lambda event, session: print(event))
        auth_service.sign_in("me@example.com", "secret")   # -> SIGNED_IN
        unsubscribe()
    """

    def __init__(
        self,
        client_factory: Callable[[], Any] = SupabaseClient.create_anon_client,
        admin_client_factory: Callable[[], Any] = SupabaseClient.get_client,
        redirect_url: str | None = None,
    ):
        self.client_factory = client_factory
        self.admin_client_factory = admin_client_factory
        self.redirect_url = redirect_url or settings.AUTH_REDIRECT_URL
        self._listeners: list[AuthListener] = []

    # -------------------------------------------------------------------------
    # State change subscription
    # -------------------------------------------------------------------------

    def subscribe(self, callback: AuthListener) -> Callable[[], None]:
        """
        Register a listener for auth state changes.

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(callback)

        def unsubscribe() -> None:
            if callback in self._listeners:
                self._listeners.remove(callback)

        return unsubscribe

    def _notify(self, event: str, session: Any) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, session)
            except Exception as e:
                logger.error(f"Auth listener failed on {event}: {e}")

    def _new_client(self) -> Any:
        client = self.client_factory()
        client.auth.on_auth_state_change(self._notify)
        return client

    # -------------------------------------------------------------------------
    # Flows
    # -------------------------------------------------------------------------

    def sign_up(self, email: str, password: str) -> dict[str, Any]:
        """
        Register a new user.

        When email confirmation is on, no session comes back and
        `confirmation_required` is True.

        Raises:
            AuthenticationError: If the identity service rejects the sign-up
        """
        client = self._new_client()

        try:
            response = client.auth.sign_up({
                "email": email,
                "password": password,
                "options": {"email_redirect_to": self.redirect_url},
            })
        except Exception as e:
            logger.warning(f"Sign-up failed for {email}: {e}")
            raise AuthenticationError(str(e)) from e

        logger.info(f"Signed up user: {email}")
        return _session_payload(response)

    def sign_in(self, email: str, password: str) -> dict[str, Any]:
        """
        Password sign-in.

        Raises:
            AuthenticationError: On wrong credentials or unconfirmed email
        """
        client = self._new_client()

        try:
            response = client.auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except Exception as e:
            logger.warning(f"Sign-in failed for {email}: {e}")
            raise AuthenticationError(str(e)) from e

        logger.info(f"Signed in user: {email}")
        return _session_payload(response)

    def sign_out(self, access_token: str) -> None:
        """
        Revoke the session behind an access token.

        Raises:
            AuthenticationError: If the identity service rejects the token
        """
        try:
            admin = self.admin_client_factory()
            admin.auth.admin.sign_out(access_token)
        except SupabaseClientError:
            raise
        except Exception as e:
            logger.warning(f"Sign-out failed: {e}")
            raise AuthenticationError(str(e)) from e

        # Admin sign-out doesn't go through a user client, so no event fires
        self._notify("SIGNED_OUT", None)
        logger.info("Signed out session")


# Shared instance so listeners registered at startup see every flow
auth_service = AuthService()
