# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Google sign-in for the single admin account, plus session inspection and
# sign-out.
#
#   GET  /auth/google               -> redirect to Google's consent screen
#   GET  /auth/google/callback      -> exchange code, set cookie, redirect
#   GET  /api/auth/session          -> {"session": {...} | null}
#   POST /api/auth/signout          -> clear cookie, {"success": true}
#
# OAuth failures never surface as error pages; they become /?error=<code>
# redirects.
# =============================================================================

import logging
from typing import Optional

import httpx
from fastapi import APIRouter
from fastapi.responses import JSONResponse, RedirectResponse

from app.auth.dependencies import GoogleClientDep, SessionDep
from app.auth.gate import emails_match
from app.auth.google import ADMIN_STATE, GoogleOAuthError
from app.auth.models import SessionResponse
from app.auth.session import SESSION_COOKIE_NAME, encode_session, new_session
from app.config import settings

logger = logging.getLogger(__name__)

# Browser-facing flow, mounted without a prefix
router = APIRouter(prefix="/auth", tags=["Auth"])

# JSON endpoints, mounted under /api
api_router = APIRouter(prefix="/auth", tags=["Auth"])


def _callback_url() -> str:
    return f"{settings.site_url}/auth/google/callback"


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=307)


def _set_session_cookie(response: RedirectResponse, token: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.session_max_age_seconds,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


# =============================================================================
# OAuth Flow
# =============================================================================

@router.get("/google")
async def google_login(google: GoogleClientDep, admin: bool = False):
    """
    Start Google sign-in.

    `?admin=true` is carried through Google as `state=admin`.
    """
    return _redirect(google.authorization_url(_callback_url(), admin=admin))


@router.get("/google/callback")
async def google_callback(
    google: GoogleClientDep,
    code: Optional[str] = None,
    state: Optional[str] = None,
    error: Optional[str] = None,
):
    """
    Finish Google sign-in.

    Only the configured admin account receives a session cookie. An admin
    login attempt from any other account is sent to /not-found.
    """
    if error:
        logger.warning(f"Google returned an error: {error}")
        return _redirect(f"/?error={error}")

    if not code:
        return _redirect("/?error=no_code")

    try:
        access_token = await google.exchange_code(code, _callback_url())
        user = await google.fetch_user_info(access_token)
    except GoogleOAuthError as e:
        logger.error(f"OAuth exchange failed: {e}")
        return _redirect(f"/?error={e.code}")
    except (httpx.HTTPError, ValueError) as e:
        logger.exception(f"OAuth error: {e}")
        return _redirect("/?error=oauth_error")

    is_admin = emails_match(user.email, settings.ADMIN_EMAIL)

    if state == ADMIN_STATE and not is_admin:
        logger.warning(f"Rejected admin login for {user.email}")
        return _redirect("/not-found")

    if not is_admin:
        return _redirect("/")

    session = new_session(
        user_id=user.id,
        email=user.email,
        is_admin=True,
        name=user.name,
        picture=user.picture,
    )
    response = _redirect("/dashboard/admin")
    _set_session_cookie(response, encode_session(session))
    logger.info(f"Admin signed in: {user.email}")
    return response


# =============================================================================
# Session API
# =============================================================================

@api_router.get("/session", response_model=SessionResponse)
def get_session(session: SessionDep) -> SessionResponse:
    """Current session claims, or null when signed out."""
    return SessionResponse(session=session.to_json() if session else None)


@api_router.post("/signout")
def sign_out():
    """Clear the session cookie."""
    response = JSONResponse(content={"success": True})
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return response
