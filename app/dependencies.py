# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends

from app.config import settings
from core.services.revalidation_service import (
    PageCacheRevalidator,
    RevalidationService,
    Revalidator,
)
from lib.page_cache import PageCache
from lib.supabase_client import SupabaseClient

# Rendered public pages, shared by every request in this process
page_cache = PageCache(ttl_seconds=settings.PAGE_REVALIDATE_SECONDS)


def get_supabase_client() -> type[SupabaseClient]:
    """
    Get Supabase client instance.

    Returns the singleton client wrapper.
    """
    return SupabaseClient


def get_page_cache() -> PageCache:
    return page_cache


def get_revalidator(cache: Annotated[PageCache, Depends(get_page_cache)]) -> Revalidator:
    """
    The cache that write handlers invalidate.

    Tests override this with a recorder.
    """
    return PageCacheRevalidator(cache)


def get_revalidation_service(
    revalidator: Annotated[Revalidator, Depends(get_revalidator)],
) -> RevalidationService:
    return RevalidationService(revalidator)


# Type aliases for dependency injection
SupabaseDep = Annotated[type[SupabaseClient], Depends(get_supabase_client)]
PageCacheDep = Annotated[PageCache, Depends(get_page_cache)]
RevalidationDep = Annotated[RevalidationService, Depends(get_revalidation_service)]
