# =============================================================================
# app/routers/pages.py - Public Pages
# =============================================================================
# Server-rendered public pages:
#   /                        latest items of every kind
#   /blog, /projects, /services
#   /blog/{slug}, /projects/{slug}, /services/{slug}
#   /contact, /privacy-policy, /terms-of-service
#   /not-found, /auth/unauthorized
#
# Anonymous renders are kept in the page cache for PAGE_REVALIDATE_SECONDS
# and dropped early by /api/revalidate and by the content write handlers.
# Signed-in visitors always get a fresh render, since the page carries
# their session.
# =============================================================================

import logging
from typing import Callable, Optional

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from app.auth import AdminSession, SessionDep
from app.config import settings
from app.dependencies import PageCacheDep
from app.exceptions import ContentNotFoundError, ContentOperationError
from app.templating import render_page
from core.models.content import ContentBase, ContentFormat
from core.services.content_service import ContentService, blog_api, project_api, service_api
from lib.markdown import TocEntry, parse, render, table_of_contents
from lib.page_cache import PageCache
from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)

router = APIRouter()

HEADINGS = {
    "blogs": "Blog",
    "projects": "Projects",
    "services": "Services",
}

HOME_LATEST_LIMIT = 3


def serve_cached(
    request: Request,
    cache: PageCache,
    session: Optional[AdminSession],
    build: Callable[[], tuple[str, bool]],
) -> HTMLResponse:
    """
    Serve the request path from the page cache, rendering it on a miss.

    `build` returns the body and whether it may be cached; a render that
    hit a database failure is served once and not kept.
    """
    path = request.url.path
    anonymous = session is None

    if anonymous:
        body = cache.get(path)
        if body is not None:
            return HTMLResponse(body, headers={"X-Cache": "HIT"})

    body, cacheable = build()
    if anonymous and cacheable:
        cache.set(path, body)
    return HTMLResponse(body, headers={"X-Cache": "MISS"})


def render_body(entity: ContentBase) -> tuple[str, list[TocEntry]]:
    """HTML body and table of contents for an entity's content."""
    if entity.content_format == ContentFormat.HTML.value:
        # Stored HTML comes from the admin editor and is served as written
        return entity.content, []

    document = parse(entity.content)
    return render(document), table_of_contents(document)


def not_found_page(session: Optional[AdminSession] = None) -> HTMLResponse:
    body = render_page(
        "message.html",
        session=session,
        heading="Page not found",
        message="The page you are looking for does not exist or has been moved.",
    )
    return HTMLResponse(body, status_code=404)


# =============================================================================
# Home
# =============================================================================

@router.get("/", response_class=HTMLResponse)
def home(request: Request, cache: PageCacheDep, session: SessionDep):
    def build() -> tuple[str, bool]:
        sections = []
        complete = True
        for service in (blog_api, project_api, service_api):
            schema = service.schema
            try:
                cards = service.get_latest(HOME_LATEST_LIMIT)
            except SupabaseClientError as e:
                logger.error(f"Home page: failed to fetch {schema.plural}: {e}")
                cards = []
                complete = False
            sections.append({
                "heading": HEADINGS[schema.plural],
                "base_path": schema.base_path,
                "cards": cards,
            })
        return render_page("home.html", session=session, sections=sections), complete

    return serve_cached(request, cache, session, build)


# =============================================================================
# Listings & Details
# =============================================================================

def _listing(
    service: ContentService,
    request: Request,
    cache: PageCache,
    session: Optional[AdminSession],
) -> HTMLResponse:
    schema = service.schema

    def build() -> tuple[str, bool]:
        try:
            cards = service.get_all_for_cards()
            complete = True
        except SupabaseClientError as e:
            logger.error(f"Failed to fetch {schema.plural} listing: {e}")
            cards = []
            complete = False
        body = render_page(
            "listing.html",
            session=session,
            heading=HEADINGS[schema.plural],
            base_path=schema.base_path,
            cards=cards,
        )
        return body, complete

    return serve_cached(request, cache, session, build)


def _detail(
    service: ContentService,
    slug: str,
    request: Request,
    cache: PageCache,
    session: Optional[AdminSession],
) -> HTMLResponse:
    schema = service.schema

    def build() -> tuple[str, bool]:
        try:
            entity = service.get_by_slug(slug, published_only=True)
        except SupabaseClientError as e:
            raise ContentOperationError(f"Failed to fetch {schema.label}", cause=e)

        body_html, toc = render_body(entity)
        body = render_page(
            "detail.html",
            session=session,
            entity=entity,
            body=body_html,
            toc=toc,
            path=request.url.path,
        )
        return body, True

    try:
        return serve_cached(request, cache, session, build)
    except ContentNotFoundError:
        return not_found_page(session)


@router.get("/blog", response_class=HTMLResponse)
def blog_listing(request: Request, cache: PageCacheDep, session: SessionDep):
    return _listing(blog_api, request, cache, session)


@router.get("/blog/{slug}", response_class=HTMLResponse)
def blog_detail(slug: str, request: Request, cache: PageCacheDep, session: SessionDep):
    return _detail(blog_api, slug, request, cache, session)


@router.get("/projects", response_class=HTMLResponse)
def project_listing(request: Request, cache: PageCacheDep, session: SessionDep):
    return _listing(project_api, request, cache, session)


@router.get("/projects/{slug}", response_class=HTMLResponse)
def project_detail(slug: str, request: Request, cache: PageCacheDep, session: SessionDep):
    return _detail(project_api, slug, request, cache, session)


@router.get("/services", response_class=HTMLResponse)
def service_listing(request: Request, cache: PageCacheDep, session: SessionDep):
    return _listing(service_api, request, cache, session)


@router.get("/services/{slug}", response_class=HTMLResponse)
def service_detail(slug: str, request: Request, cache: PageCacheDep, session: SessionDep):
    return _detail(service_api, slug, request, cache, session)


# =============================================================================
# Static Pages
# =============================================================================

STATIC_TEMPLATES = {
    "/contact": "contact.html",
    "/privacy-policy": "privacy.html",
    "/terms-of-service": "terms.html",
}


def _static(request: Request, cache: PageCache, session: Optional[AdminSession]) -> HTMLResponse:
    template = STATIC_TEMPLATES[request.url.path]

    def build() -> tuple[str, bool]:
        body = render_page(template, session=session, contact_email=settings.CONTACT_EMAIL)
        return body, True

    return serve_cached(request, cache, session, build)


@router.get("/contact", response_class=HTMLResponse)
def contact(request: Request, cache: PageCacheDep, session: SessionDep):
    return _static(request, cache, session)


@router.get("/privacy-policy", response_class=HTMLResponse)
def privacy_policy(request: Request, cache: PageCacheDep, session: SessionDep):
    return _static(request, cache, session)


@router.get("/terms-of-service", response_class=HTMLResponse)
def terms_of_service(request: Request, cache: PageCacheDep, session: SessionDep):
    return _static(request, cache, session)


# =============================================================================
# Status Pages
# =============================================================================

@router.get("/not-found", response_class=HTMLResponse)
def not_found(session: SessionDep):
    return not_found_page(session)


@router.get("/auth/unauthorized", response_class=HTMLResponse)
def unauthorized(session: SessionDep):
    body = render_page(
        "message.html",
        session=session,
        heading="Access denied",
        message="This account is not allowed into the admin dashboard.",
        link_href="/auth/google?admin=true",
        link_text="Sign in with a different account",
    )
    return HTMLResponse(body, status_code=403)
