# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the site's business logic:
# - models/: Pydantic schemas for posts, projects and services
# - services/: content facades, page revalidation, sitemap generation
#
# Code in this package should NOT import from FastAPI.
# This keeps the logic testable and reusable.
# =============================================================================
