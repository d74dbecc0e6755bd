# =============================================================================
# app/routers/ - Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - content.py: CRUD for blogs, projects and services
# - revalidate.py: Page cache invalidation endpoint
# - sitemaps.py: sitemap.xml, sub-sitemaps and robots.txt
# - pages.py: Server-rendered public pages
# - dashboard.py: Admin dashboard pages (behind the admin gate)
#
# Each router is mounted in main.py, with a URL prefix where it has one.
# =============================================================================

from . import health
from . import content
from . import revalidate
from . import sitemaps
from . import pages
from . import dashboard

__all__ = [
    "health",
    "content",
    "revalidate",
    "sitemaps",
    "pages",
    "dashboard",
]
