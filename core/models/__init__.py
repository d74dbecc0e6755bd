# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - content.py: Post / Project / Service entities, the ContentEntity union
#   and the ContentCard listing projection
#
# These models define the "contract" between API and clients.
# =============================================================================

from .content import (
    CamelModel,
    ContentBase,
    ContentCard,
    ContentEntity,
    ContentFormat,
    ContentKind,
    ContentStatus,
    DownloadItem,
    FAQItem,
    GalleryItem,
    Post,
    Project,
    RecommendedItem,
    Service,
    ServiceFeature,
    ServicePackage,
    ServicePoint,
    Testimonial,
)

# -----------------------------------------------------------------------------
# __all__ - Explicit public API
# -----------------------------------------------------------------------------
__all__ = [
    "CamelModel",
    "ContentBase",
    "ContentCard",
    "ContentEntity",
    "ContentFormat",
    "ContentKind",
    "ContentStatus",
    "DownloadItem",
    "FAQItem",
    "GalleryItem",
    "Post",
    "Project",
    "RecommendedItem",
    "Service",
    "ServiceFeature",
    "ServicePackage",
    "ServicePoint",
    "Testimonial",
]
