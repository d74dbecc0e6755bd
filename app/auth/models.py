# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AdminSession(BaseModel):
    """
    Identity carried by the `admin-session` cookie.

    Serialized with camelCase keys:
        {"id", "email", "name", "picture", "isAdmin", "loginAt"}
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    id: str
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None
    is_admin: bool = False
    login_at: datetime

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class GoogleUserInfo(BaseModel):
    """Subset of Google's userinfo response that the site uses."""
    id: str
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None
    verified_email: Optional[bool] = None


class SessionResponse(BaseModel):
    """Response of GET /api/auth/session."""
    session: Optional[dict[str, Any]] = None
