# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .content_service import (
    CONTENT_SCHEMAS,
    ContentSchema,
    ContentService,
    blog_api,
    get_content_service,
    project_api,
    service_api,
)
from .revalidation_service import (
    PageCacheRevalidator,
    RevalidationService,
    Revalidator,
    related_paths,
)

__all__ = [
    "CONTENT_SCHEMAS",
    "ContentSchema",
    "ContentService",
    "blog_api",
    "get_content_service",
    "project_api",
    "service_api",
    "PageCacheRevalidator",
    "RevalidationService",
    "Revalidator",
    "related_paths",
]
