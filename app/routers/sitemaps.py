# =============================================================================
# app/routers/sitemaps.py - Sitemap & Robots Endpoints
# =============================================================================
# /sitemap.xml is an index pointing at one sub-sitemap per section:
#   /sitemap-pages.xml     static pages
#   /sitemap-posts.xml     published blog posts
#   /sitemap-services.xml  published, indexable services
#   /sitemap-projects.xml  published projects
# =============================================================================

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse, Response

from app.config import settings
from core.services import sitemap_service
from core.services.content_service import blog_api, project_api, service_api

router = APIRouter()

XML_MEDIA_TYPE = "application/xml"


def _xml(body: str) -> Response:
    return Response(
        content=body,
        media_type=XML_MEDIA_TYPE,
        headers={"Cache-Control": f"public, max-age={settings.PAGE_REVALIDATE_SECONDS}"},
    )


@router.get("/sitemap.xml")
def sitemap_index() -> Response:
    return _xml(sitemap_service.build_index(settings.site_url))


@router.get("/sitemap-pages.xml")
def sitemap_pages() -> Response:
    return _xml(sitemap_service.build_pages(settings.site_url))


@router.get("/sitemap-posts.xml")
def sitemap_posts() -> Response:
    return _xml(sitemap_service.build_content(blog_api, settings.site_url))


@router.get("/sitemap-services.xml")
def sitemap_services() -> Response:
    return _xml(sitemap_service.build_content(service_api, settings.site_url))


@router.get("/sitemap-projects.xml")
def sitemap_projects() -> Response:
    return _xml(sitemap_service.build_content(project_api, settings.site_url))


@router.get("/robots.txt", response_class=PlainTextResponse)
def robots() -> str:
    return sitemap_service.build_robots(settings.site_url)
