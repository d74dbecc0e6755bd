# =============================================================================
# core/services/sitemap_service.py - Sitemap XML
# =============================================================================
# Builds the sitemap index and the four sub-sitemaps (pages, posts,
# services, projects) in the sitemaps.org 0.9 schema, plus robots.txt.
# =============================================================================

import logging
from dataclasses import dataclass
from datetime import datetime
from xml.etree import ElementTree

from core.services.content_service import ContentService
from lib.supabase_client import SupabaseClientError
from lib.utils import utc_now

logger = logging.getLogger(__name__)

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

SUB_SITEMAPS = (
    "sitemap-pages.xml",
    "sitemap-posts.xml",
    "sitemap-services.xml",
    "sitemap-projects.xml",
)

# path, changefreq, priority
STATIC_PAGES = (
    ("", "daily", 1.0),
    ("/blog", "daily", 0.8),
    ("/services", "weekly", 0.8),
    ("/projects", "weekly", 0.7),
    ("/contact", "monthly", 0.4),
    ("/privacy-policy", "yearly", 0.2),
    ("/terms-of-service", "yearly", 0.2),
)

ROBOTS_DISALLOW = ("/api/", "/dashboard/", "/udyomx-admin/", "/auth/")


@dataclass(frozen=True)
class SitemapUrl:
    loc: str
    lastmod: str
    changefreq: str
    priority: float


def _serialize(root: ElementTree.Element) -> str:
    body = ElementTree.tostring(root, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'


def _lastmod(value: str | datetime | None) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    return value or utc_now().isoformat()


def build_urlset(urls: list[SitemapUrl]) -> str:
    root = ElementTree.Element("urlset", xmlns=SITEMAP_NS)
    for url in urls:
        node = ElementTree.SubElement(root, "url")
        ElementTree.SubElement(node, "loc").text = url.loc
        ElementTree.SubElement(node, "lastmod").text = url.lastmod
        ElementTree.SubElement(node, "changefreq").text = url.changefreq
        ElementTree.SubElement(node, "priority").text = f"{url.priority:.1f}"
    return _serialize(root)


def build_index(base_url: str) -> str:
    """Sitemap index referencing the sub-sitemaps only."""
    now = utc_now().isoformat()
    root = ElementTree.Element("sitemapindex", xmlns=SITEMAP_NS)
    for name in SUB_SITEMAPS:
        node = ElementTree.SubElement(root, "sitemap")
        ElementTree.SubElement(node, "loc").text = f"{base_url}/{name}"
        ElementTree.SubElement(node, "lastmod").text = now
    return _serialize(root)


def build_pages(base_url: str) -> str:
    now = utc_now().isoformat()
    return build_urlset([
        SitemapUrl(f"{base_url}{path}", now, changefreq, priority)
        for path, changefreq, priority in STATIC_PAGES
    ])


def content_urls(service: ContentService, base_url: str) -> list[SitemapUrl]:
    """One <url> per published row of the service's kind."""
    schema = service.schema
    return [
        SitemapUrl(
            loc=f"{base_url}{schema.detail_path(row['slug'])}",
            lastmod=_lastmod(row.get("updated_at") or row.get("created_at")),
            changefreq=schema.sitemap_changefreq,
            priority=row.get("sitemap_priority") or schema.sitemap_priority,
        )
        for row in service.get_sitemap_rows()
    ]


def build_content(service: ContentService, base_url: str) -> str:
    """
    Sub-sitemap for one kind.

    A failing query yields an empty urlset rather than an error page, so
    crawlers never cache a broken sitemap.
    """
    try:
        urls = content_urls(service, base_url)
    except SupabaseClientError as e:
        logger.error(f"Failed to build {service.schema.plural} sitemap: {e}")
        urls = []
    logger.debug(f"{service.schema.plural} sitemap: {len(urls)} urls")
    return build_urlset(urls)


def build_robots(base_url: str) -> str:
    lines = []
    for agent in ("*", "Googlebot"):
        lines.append(f"User-agent: {agent}")
        lines.append("Allow: /")
        lines.extend(f"Disallow: {path}" for path in ROBOTS_DISALLOW)
        lines.append("")
    lines.append(f"Sitemap: {base_url}/sitemap.xml")
    lines.extend(f"Sitemap: {base_url}/{name}" for name in SUB_SITEMAPS)
    lines.append(f"Host: {base_url}")
    return "\n".join(lines) + "\n"
