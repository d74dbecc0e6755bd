# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================
# The admin identity and the cookie signing key must come from the
# environment: without them Settings refuses to load.
#
# Run with: pytest tests/test_config.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from app.auth.gate import LOGIN_REDIRECT, resolve_admin_redirect
from app.auth.session import encode_session, new_session
from app.config import Settings


REQUIRED = {
    "SUPABASE_URL": "https://example.supabase.co",
    "SUPABASE_SERVICE_KEY": "service-key",
    "ADMIN_EMAIL": "admin@udyomx.com",
}


@pytest.fixture
def bare_env(monkeypatch):
    """An environment with none of the app's variables set."""
    for name in ("SUPABASE_URL", "SUPABASE_SERVICE_KEY", "ADMIN_EMAIL", "SECRET_KEY", "ENVIRONMENT"):
        monkeypatch.delenv(name, raising=False)


class TestSecretKey:
    """SECRET_KEY signs the admin cookie and has no fallback."""

    def test_missing_secret_key_is_rejected(self, bare_env):
        with pytest.raises(ValidationError) as exc_info:
            Settings(_env_file=None, **REQUIRED)

        assert "SECRET_KEY" in str(exc_info.value)

    def test_missing_secret_key_is_rejected_in_production(self, bare_env):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, ENVIRONMENT="production", **REQUIRED)

    def test_short_secret_key_is_rejected(self, bare_env):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, SECRET_KEY="short", **REQUIRED)

    def test_cookie_signed_with_another_key_is_refused(self, bare_env):
        # Arrange
        settings = Settings(_env_file=None, SECRET_KEY="real-secret-key-0123456789", **REQUIRED)
        forged = encode_session(
            new_session(user_id="x", email="admin@udyomx.com", is_admin=True),
            secret_key="dev-secret-key-change-in-production",
        )

        # Act
        redirect = resolve_admin_redirect(
            "/dashboard/admin", forged, settings.ADMIN_EMAIL, settings.SECRET_KEY
        )

        # Assert
        assert redirect == LOGIN_REDIRECT


class TestAdminEmail:

    def test_missing_admin_email_is_rejected(self, bare_env):
        with pytest.raises(ValidationError):
            Settings(
                _env_file=None,
                SUPABASE_URL="https://example.supabase.co",
                SUPABASE_SERVICE_KEY="service-key",
                SECRET_KEY="real-secret-key-0123456789",
            )
