# =============================================================================
# app/auth/google.py - Google OAuth Client
# =============================================================================
# Authorization-code flow against Google:
#   1. authorization_url(): where /auth/google sends the browser
#   2. exchange_code():     code -> access token
#   3. fetch_user_info():   access token -> email / name / picture
#
# Both network calls use httpx.AsyncClient. Tests pass an
# httpx.MockTransport instead of reaching Google.
# =============================================================================

import logging
from typing import Any
from urllib.parse import urlencode

import httpx
from pydantic import ValidationError

from app.auth.models import GoogleUserInfo
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URL = "https://accounts.google.com/o/oauth2/v2/auth"
GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"
GOOGLE_USERINFO_URL = "https://www.googleapis.com/oauth2/v2/userinfo"

OAUTH_SCOPE = "openid email profile"
ADMIN_STATE = "admin"


class GoogleOAuthError(ApplicationError):
    """
    A step of the OAuth exchange failed.

    `code` is the value used in the `/?error=` redirect: token_error or
    user_info_error.
    """

    def __init__(self, message: str, code: str, details: dict[str, Any] | None = None):
        super().__init__(message, code=code, details=details)


class GoogleOAuthClient:
    """Thin async client for Google's OAuth 2.0 endpoints."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ):
        self.client_id = client_id
        self.client_secret = client_secret
        self.transport = transport
        self.timeout = timeout

    def authorization_url(self, redirect_uri: str, admin: bool = False) -> str:
        """URL of Google's consent screen. `state=admin` marks an admin login."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "scope": OAUTH_SCOPE,
            "state": ADMIN_STATE if admin else "",
            "access_type": "offline",
            "prompt": "consent",
        }
        return f"{GOOGLE_AUTH_URL}?{urlencode(params)}"

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self.transport, timeout=self.timeout)

    async def exchange_code(self, code: str, redirect_uri: str) -> str:
        """
        Trade an authorization code for an access token.

        Raises:
            GoogleOAuthError: code "token_error" if Google rejects the code
        """
        async with self._client() as client:
            response = await client.post(
                GOOGLE_TOKEN_URL,
                data={
                    "code": code,
                    "client_id": self.client_id,
                    "client_secret": self.client_secret,
                    "redirect_uri": redirect_uri,
                    "grant_type": "authorization_code",
                },
            )
        tokens = response.json()

        if tokens.get("error") or "access_token" not in tokens:
            raise GoogleOAuthError(
                "Google rejected the authorization code",
                code="token_error",
                details={"status": response.status_code, "error": tokens.get("error")},
            )
        return tokens["access_token"]

    async def fetch_user_info(self, access_token: str) -> GoogleUserInfo:
        """
        Profile of the signed-in Google account.

        Raises:
            GoogleOAuthError: code "user_info_error" if the profile is unavailable
        """
        async with self._client() as client:
            response = await client.get(
                GOOGLE_USERINFO_URL,
                headers={"Authorization": f"Bearer {access_token}"},
            )
        payload = response.json()

        if payload.get("error"):
            raise GoogleOAuthError(
                "Google did not return user info",
                code="user_info_error",
                details={"status": response.status_code, "error": payload.get("error")},
            )

        try:
            return GoogleUserInfo.model_validate(payload)
        except ValidationError as e:
            raise GoogleOAuthError(
                "Google user info is missing required fields",
                code="user_info_error",
                details={"errors": e.error_count()},
            )
