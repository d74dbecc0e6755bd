# =============================================================================
# tests/test_pages.py - Public Page Tests
# =============================================================================
# Tests for the server-rendered pages:
# - Listings and details show published content only
# - Markdown bodies are rendered with a table of contents
# - Anonymous renders are cached until revalidated, renames included
# - Service sections, recommended links and the static pages
#
# Run with: pytest tests/test_pages.py -v
# =============================================================================

from app.auth.session import SESSION_COOKIE_NAME, encode_session, new_session
from app.dependencies import page_cache


class TestListings:

    def test_blog_listing_shows_published_only(self, client, fake_db, post_row, draft_row):
        fake_db.tables["posts"] = [post_row, draft_row]

        response = client.get("/blog")

        assert response.status_code == 200
        assert "Hello World" in response.text
        assert "Work in Progress" not in response.text

    def test_home_shows_latest_of_each_kind(self, client, fake_db, post_row, project_row, service_row):
        fake_db.tables["posts"] = [post_row]
        fake_db.tables["projects"] = [project_row]
        fake_db.tables["services"] = [service_row]

        response = client.get("/")

        assert "Hello World" in response.text
        assert "Site Builder" in response.text
        assert "Web Development" in response.text

    def test_failed_listing_is_not_cached(self, client, fake_db):
        fake_db.failing_tables.add("projects")

        response = client.get("/projects")

        assert response.status_code == 200
        assert "/projects" not in page_cache


class TestDetails:

    def test_post_detail_renders_markdown_and_toc(self, client, fake_db, post_row):
        fake_db.tables["posts"] = [post_row]

        response = client.get("/blog/hello-world")

        assert response.status_code == 200
        assert '<h2 id="intro">Intro</h2>' in response.text
        assert '<a href="#intro">Intro</a>' in response.text
        assert "<strong>blog</strong>" in response.text

    def test_draft_detail_is_404(self, client, fake_db, draft_row):
        fake_db.tables["posts"] = [draft_row]

        response = client.get("/blog/work-in-progress")

        assert response.status_code == 404
        assert "Page not found" in response.text

    def test_service_detail(self, client, fake_db, service_row):
        fake_db.tables["services"] = [service_row]

        response = client.get("/services/web-development")

        assert "Sites that load fast" in response.text

    def test_service_detail_sections_in_order(self, client, fake_db, service_row):
        # Arrange
        fake_db.tables["services"] = [{
            **service_row,
            "problems": [{"text": "Slow pages", "order_index": 0}],
            "solutions": [{"text": "Server rendering", "order_index": 0}],
            "features": [{"title": "Fast hosting", "order_index": 0}],
            "packages": [
                {"title": "Growth Plan", "price": 999, "is_popular": True, "order_index": 2},
                {"title": "Starter Plan", "price": 499, "discount_price": 399, "order_index": 1},
            ],
            "testimonials": [{"name": "Rina", "quote": "Great work", "rating": 5}],
        }]

        # Act
        text = client.get("/services/web-development").text

        # Assert
        for expected in ("Slow pages", "Server rendering", "Fast hosting", "Most popular", "Great work"):
            assert expected in text
        assert "<del>499.0</del> 399.0" in text
        assert text.index("Starter Plan") < text.index("Growth Plan")

    def test_recommended_links(self, client, fake_db, post_row):
        fake_db.tables["posts"] = [{
            **post_row,
            "recommended": [
                {"type": "project", "title": "Site Builder", "slug": "site-builder"},
                {"type": "external", "title": "Sneaky", "url": "javascript:alert(1)"},
            ],
        }]

        text = client.get("/blog/hello-world").text

        assert 'href="/projects/site-builder"' in text
        assert "javascript:" not in text


class TestCaching:

    def test_second_request_is_served_from_cache(self, client, fake_db, post_row):
        fake_db.tables["posts"] = [post_row]

        first = client.get("/blog")
        fake_db.tables["posts"] = []
        second = client.get("/blog")

        assert first.headers["x-cache"] == "MISS"
        assert second.headers["x-cache"] == "HIT"
        assert "Hello World" in second.text

    def test_write_revalidates_listing(self, fake_db, post_row):
        # The real revalidator, not the recording one from the client fixture
        from fastapi.testclient import TestClient

        from app.main import app

        fake_db.tables["posts"] = [post_row]
        page_cache.clear()
        with TestClient(app) as test_client:
            test_client.get("/blog")
            assert "/blog" in page_cache

            test_client.put("/api/blogs", json={"id": post_row["id"], "title": "Renamed"})

            assert "/blog" not in page_cache
            assert "Renamed" in test_client.get("/blog").text
        page_cache.clear()

    def test_renamed_and_unpublished_post_leaves_old_url(self, fake_db, post_row):
        from fastapi.testclient import TestClient

        from app.main import app

        # Arrange: the old detail page is cached
        fake_db.tables["posts"] = [post_row]
        page_cache.clear()
        with TestClient(app) as test_client:
            assert test_client.get("/blog/hello-world").status_code == 200
            assert "/blog/hello-world" in page_cache

            # Act
            test_client.put(
                "/api/blogs",
                json={"id": post_row["id"], "slug": "renamed", "status": "draft"},
            )
            old = test_client.get("/blog/hello-world")
            new = test_client.get("/blog/renamed")

        # Assert
        assert old.status_code == 404
        assert new.status_code == 404
        page_cache.clear()

    def test_signed_in_visitor_bypasses_cache(self, client, fake_db, post_row):
        fake_db.tables["posts"] = [post_row]
        client.cookies.set(
            SESSION_COOKIE_NAME,
            encode_session(new_session(user_id="g-1", email="admin@udyomx.com", is_admin=True)),
        )

        response = client.get("/blog")

        assert response.headers["x-cache"] == "MISS"
        assert "/blog" not in page_cache
        assert 'href="/dashboard/admin"' in response.text


class TestStatusPages:

    def test_not_found_page(self, client):
        assert client.get("/not-found").status_code == 404

    def test_unauthorized_page(self, client):
        response = client.get("/auth/unauthorized")

        assert response.status_code == 403
        assert "Access denied" in response.text


class TestStaticPages:

    def test_legal_pages_render(self, client):
        assert "<h1>Privacy Policy</h1>" in client.get("/privacy-policy").text
        assert "<h1>Terms of Service</h1>" in client.get("/terms-of-service").text

    def test_contact_page_shows_configured_email(self, client, monkeypatch):
        from app.config import settings

        monkeypatch.setattr(settings, "CONTACT_EMAIL", "hello@udyomx.test")

        response = client.get("/contact")

        assert response.status_code == 200
        assert 'href="mailto:hello@udyomx.test"' in response.text

    def test_contact_page_hides_empty_email(self, client, monkeypatch):
        from app.config import settings

        monkeypatch.setattr(settings, "CONTACT_EMAIL", "")

        assert "mailto:" not in client.get("/contact").text
