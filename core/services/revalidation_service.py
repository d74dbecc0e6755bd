# =============================================================================
# core/services/revalidation_service.py - Page Cache Invalidation
# =============================================================================
# Decides which rendered pages go stale when content changes:
#
#   the exact path            always
#   the kind's listing page   /blog, /projects or /services
#   the home page             it embeds the "latest items" widget
#
# The actual cache is behind the Revalidator protocol so tests can record
# the invalidated paths instead of touching a real cache.
# =============================================================================

import logging
from typing import Protocol

from core.models.content import ContentKind
from core.services.content_service import CONTENT_SCHEMAS
from lib.page_cache import PageCache

logger = logging.getLogger(__name__)

HOME_PATH = "/"

# Accepted `type` values; "blog" is an alias for posts
REVALIDATE_TYPES: dict[str, ContentKind] = {
    "post": ContentKind.POST,
    "blog": ContentKind.POST,
    "project": ContentKind.PROJECT,
    "service": ContentKind.SERVICE,
}


class Revalidator(Protocol):
    """Anything that can drop a cached page."""

    def revalidate_path(self, path: str) -> None:
        ...


class PageCacheRevalidator:
    """Revalidator backed by the in-process PageCache."""

    def __init__(self, cache: PageCache):
        self.cache = cache

    def revalidate_path(self, path: str) -> None:
        self.cache.invalidate(path)


def related_paths(path: str, content_type: str | None = None) -> list[str]:
    """
    Paths to invalidate for a change at `path`.

    Unknown or missing `content_type` values invalidate only `path`.

    Example:
        related_paths("/blog/foo", "post") -> ["/blog/foo", "/blog", "/"]
    """
    paths = [path]
    kind = REVALIDATE_TYPES.get(content_type or "")
    if kind is not None:
        for extra in (CONTENT_SCHEMAS[kind].base_path, HOME_PATH):
            if extra not in paths:
                paths.append(extra)
    return paths


class RevalidationService:
    """Runs invalidations against a Revalidator."""

    def __init__(self, revalidator: Revalidator):
        self.revalidator = revalidator

    def revalidate(self, path: str, content_type: str | None = None) -> list[str]:
        """Invalidate `path` and its related pages. Returns the paths touched."""
        paths = related_paths(path, content_type)
        for target in paths:
            self.revalidator.revalidate_path(target)
        logger.info(f"Revalidated {paths}")
        return paths

    def revalidate_entity(
        self,
        kind: ContentKind,
        slug: str,
        previous_slug: str | None = None,
    ) -> list[str]:
        """
        Invalidate an entity's detail page, its listing and the home page.

        When the slug changed, the page at `previous_slug` is dropped too so
        the old URL stops serving stale content.
        """
        schema = CONTENT_SCHEMAS[kind]
        paths = self.revalidate(schema.detail_path(slug), kind.value)

        if previous_slug and previous_slug != slug:
            old_path = schema.detail_path(previous_slug)
            self.revalidator.revalidate_path(old_path)
            paths.append(old_path)
            logger.info(f"Revalidated renamed path {old_path}")
        return paths
