# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the UdyomX site:
# - test_models.py: Unit tests for Pydantic model validation
# - test_config.py: required settings (admin email, signing key)
# - test_content_service.py / test_content_routes.py: content facade and API
# - test_auth.py: session cookie, admin gate, Google OAuth callback
# - test_pages.py / test_sitemaps.py: rendered pages, caching, sitemaps
# - test_markdown.py / test_slugs.py / test_page_cache.py: lib helpers
#
# Run tests with: pytest
# =============================================================================
