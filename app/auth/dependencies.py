# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for the current session and the Google
# OAuth client.
#
# The session is parsed from the cookie on every request and handed to
# route handlers (and from there to templates) explicitly.
#
# Usage:
#   from app.auth import SessionDep
#
#   @router.get("/page")
#   def page(session: SessionDep):
#       if session and session.is_admin: ...
# =============================================================================

from typing import Annotated, Optional

from fastapi import Cookie, Depends

from app.auth.google import GoogleOAuthClient
from app.auth.models import AdminSession
from app.auth.session import SESSION_COOKIE_NAME, decode_session
from app.config import settings


def get_current_session(
    admin_session: Annotated[Optional[str], Cookie(alias=SESSION_COOKIE_NAME)] = None,
) -> Optional[AdminSession]:
    """
    The session carried by the request's cookie.

    Returns None when the cookie is absent or fails verification, instead of
    raising an error.
    """
    return decode_session(admin_session)


def get_google_client() -> GoogleOAuthClient:
    """Google OAuth client built from settings. Overridden in tests."""
    return GoogleOAuthClient(
        client_id=settings.GOOGLE_CLIENT_ID,
        client_secret=settings.GOOGLE_CLIENT_SECRET,
    )


# Type aliases for dependency injection
SessionDep = Annotated[Optional[AdminSession], Depends(get_current_session)]
GoogleClientDep = Annotated[GoogleOAuthClient, Depends(get_google_client)]
