# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - markdown.py: Markdown tokenizer, AST and HTML renderer
# - page_cache.py: In-process TTL cache of rendered pages
# - slugs.py: Slug generation/validation and read-time estimates
# - utils.py: Shared utilities (ids, timestamps, base error class)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import ApplicationError

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Utils
    "ApplicationError",
]
