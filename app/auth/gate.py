# =============================================================================
# app/auth/gate.py - Admin Route Gate
# =============================================================================
# Decides, per request, whether a dashboard path may be served. Runs as HTTP
# middleware in main.py; nothing is remembered between requests.
#
#   no cookie / bad cookie     -> /auth/google?admin=true
#   signed in, not admin       -> /dashboard/my-orders
#   admin flag, wrong email    -> /auth/unauthorized
#   admin                      -> served
# =============================================================================

import logging

from app.auth.session import decode_session

logger = logging.getLogger(__name__)

ADMIN_PREFIX = "/dashboard/admin"
ADMIN_ALIAS = "/udyomx-admin"

LOGIN_REDIRECT = "/auth/google?admin=true"
NON_ADMIN_REDIRECT = "/dashboard/my-orders"
UNAUTHORIZED_REDIRECT = "/auth/unauthorized"


def is_protected_path(path: str) -> bool:
    """True for /dashboard/admin, anything below it, and /udyomx-admin."""
    path = path.rstrip("/") or "/"
    return (
        path == ADMIN_PREFIX
        or path.startswith(f"{ADMIN_PREFIX}/")
        or path == ADMIN_ALIAS
    )


def emails_match(email: str | None, admin_email: str) -> bool:
    return bool(email) and email.strip().lower() == admin_email.strip().lower()


def resolve_admin_redirect(
    path: str,
    cookie_value: str | None,
    admin_email: str,
    secret_key: str | None = None,
) -> str | None:
    """
    Where to send a request for `path`, or None to let it through.

    Example:
        resolve_admin_redirect("/dashboard/admin", None, "a@b.c")
        -> "/auth/google?admin=true"
    """
    if not is_protected_path(path):
        return None

    session = decode_session(cookie_value, secret_key)
    if session is None:
        return LOGIN_REDIRECT

    if not session.is_admin:
        return NON_ADMIN_REDIRECT

    if not emails_match(session.email, admin_email):
        logger.warning(f"Admin session for {session.email} no longer matches the admin account")
        return UNAUTHORIZED_REDIRECT

    return None
