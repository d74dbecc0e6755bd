# =============================================================================
# app/auth/session.py - Admin Session Cookie
# =============================================================================
# The admin session lives entirely in the `admin-session` cookie; there is no
# server-side session store. The cookie value is the session claims signed
# as an HS256 JWT with SECRET_KEY, so a client cannot mint or edit one.
#
# Usage:
#   token = encode_session(session)
#   session = decode_session(request.cookies.get(SESSION_COOKIE_NAME))
# =============================================================================

import logging
from datetime import datetime, timedelta

from jose import JWTError, jwt
from pydantic import ValidationError

from app.auth.models import AdminSession
from app.config import settings
from lib.utils import utc_now

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "admin-session"
SESSION_ALGORITHM = "HS256"


def encode_session(
    session: AdminSession,
    secret_key: str | None = None,
    max_age_seconds: int | None = None,
) -> str:
    """Sign the session claims. `exp` matches the cookie lifetime."""
    max_age = max_age_seconds or settings.session_max_age_seconds
    claims = session.to_json()
    claims["exp"] = int((session.login_at + timedelta(seconds=max_age)).timestamp())
    return jwt.encode(claims, secret_key or settings.SECRET_KEY, algorithm=SESSION_ALGORITHM)


def decode_session(token: str | None, secret_key: str | None = None) -> AdminSession | None:
    """
    Parse a cookie value back into a session.

    Missing, expired, tampered or malformed values all yield None: a bad
    cookie is treated exactly like no cookie.
    """
    if not token:
        return None

    try:
        claims = jwt.decode(
            token,
            secret_key or settings.SECRET_KEY,
            algorithms=[SESSION_ALGORITHM],
        )
        return AdminSession.model_validate(claims)
    except JWTError as e:
        logger.warning(f"Rejected session cookie: {e}")
        return None
    except ValidationError as e:
        logger.warning(f"Session cookie has unexpected claims: {e.error_count()} errors")
        return None


def new_session(
    user_id: str,
    email: str,
    is_admin: bool,
    name: str | None = None,
    picture: str | None = None,
    login_at: datetime | None = None,
) -> AdminSession:
    return AdminSession(
        id=user_id,
        email=email,
        name=name,
        picture=picture,
        is_admin=is_admin,
        login_at=login_at or utc_now(),
    )
