# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Google sign-in for the site admin, with the session kept in a signed
# `admin-session` cookie.
#
# Usage:
#   from app.auth import SessionDep
#
#   @router.get("/dashboard/admin")
#   def dashboard(session: SessionDep):
#       return {"email": session.email if session else None}
# =============================================================================

from app.auth.dependencies import (
    GoogleClientDep,
    SessionDep,
    get_current_session,
    get_google_client,
)
from app.auth.gate import is_protected_path, resolve_admin_redirect
from app.auth.models import AdminSession, GoogleUserInfo
from app.auth.session import SESSION_COOKIE_NAME, decode_session, encode_session

__all__ = [
    "GoogleClientDep",
    "SessionDep",
    "get_current_session",
    "get_google_client",
    "is_protected_path",
    "resolve_admin_redirect",
    "AdminSession",
    "GoogleUserInfo",
    "SESSION_COOKIE_NAME",
    "decode_session",
    "encode_session",
]
