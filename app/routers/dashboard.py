# =============================================================================
# app/routers/dashboard.py - Admin Dashboard Pages
# =============================================================================
# Pages under /dashboard/admin and /udyomx-admin. Access is enforced by the
# admin gate middleware in main.py before these handlers run; they are never
# cached.
# =============================================================================

import logging

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from app.auth import SessionDep
from app.exceptions import ContentOperationError
from app.routers.pages import HEADINGS, not_found_page
from app.templating import render_page
from core.services.content_service import CONTENT_SCHEMAS, get_content_service
from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)

router = APIRouter()

_SERVICES_BY_PLURAL = {
    schema.plural: get_content_service(kind) for kind, schema in CONTENT_SCHEMAS.items()
}

_NO_STORE = {"Cache-Control": "no-store"}


@router.get("/dashboard/admin", response_class=HTMLResponse)
@router.get("/udyomx-admin", response_class=HTMLResponse)
def admin_dashboard(session: SessionDep):
    """Overview with per-kind totals."""
    sections = []
    for plural, service in _SERVICES_BY_PLURAL.items():
        try:
            items = service.get_all_admin()
        except SupabaseClientError as e:
            raise ContentOperationError(f"Failed to fetch {plural}", cause=e)
        sections.append({
            "plural": plural,
            "heading": HEADINGS[plural],
            "total": len(items),
            "published": sum(1 for item in items if item.is_published),
        })

    body = render_page("dashboard.html", session=session, sections=sections)
    return HTMLResponse(body, headers=_NO_STORE)


@router.get("/dashboard/admin/{section}", response_class=HTMLResponse)
def admin_section(section: str, session: SessionDep):
    """Every row of one kind, drafts included."""
    service = _SERVICES_BY_PLURAL.get(section)
    if service is None:
        return not_found_page(session)

    try:
        items = service.get_all_admin()
    except SupabaseClientError as e:
        raise ContentOperationError(f"Failed to fetch {section}", cause=e)

    body = render_page(
        "dashboard_list.html",
        session=session,
        heading=HEADINGS[section],
        plural=section,
        base_path=service.schema.base_path,
        items=items,
    )
    return HTMLResponse(body, headers=_NO_STORE)


@router.get("/dashboard/my-orders", response_class=HTMLResponse)
def my_orders(session: SessionDep):
    """Landing page for signed-in accounts without admin access."""
    body = render_page(
        "message.html",
        session=session,
        heading="My orders",
        message="You have no orders yet.",
    )
    return HTMLResponse(body, headers=_NO_STORE)
