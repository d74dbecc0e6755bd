# =============================================================================
# app/routers/revalidate.py - Page Revalidation Endpoint
# =============================================================================
# POST /api/revalidate {"path": "/blog/foo", "type": "post"}
#
# Drops the cached page at `path`. With a known `type` the kind's listing
# page and the home page are dropped as well.
# =============================================================================

import logging
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel

from app.dependencies import RevalidationDep
from app.exceptions import MissingFieldError
from lib.utils import epoch_millis

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Request/Response Models
# =============================================================================

class RevalidateRequest(BaseModel):
    """Request body for revalidation."""
    path: Optional[str] = None
    type: Optional[str] = None


class RevalidateResponse(BaseModel):
    """Response for revalidation."""
    revalidated: bool
    message: str
    now: int


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/revalidate", response_model=RevalidateResponse)
def revalidate(request: RevalidateRequest, revalidation: RevalidationDep) -> RevalidateResponse:
    """
    Invalidate a rendered page and its related pages.

    Returns:
        revalidated flag, a message, and the server time in epoch milliseconds
    """
    if not request.path:
        raise MissingFieldError("Path is required", field="path")

    revalidation.revalidate(request.path, request.type)

    return RevalidateResponse(
        revalidated=True,
        message=f"Revalidated {request.path} and related pages",
        now=epoch_millis(),
    )
