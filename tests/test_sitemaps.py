# =============================================================================
# tests/test_sitemaps.py - Sitemap & Robots Tests
# =============================================================================

from xml.etree import ElementTree

import pytest

from app.config import settings
from core.services import sitemap_service
from core.services.content_service import blog_api, service_api

NS = {"sm": sitemap_service.SITEMAP_NS}
BASE = "https://udyomx.test"


def locs(xml: str) -> list[str]:
    root = ElementTree.fromstring(xml.encode())
    return [node.text for node in root.iterfind(".//sm:loc", NS)]


class TestBuilders:
    """Pure XML builders."""

    def test_index_lists_sub_sitemaps_only(self):
        xml = sitemap_service.build_index(BASE)

        assert locs(xml) == [
            f"{BASE}/sitemap-pages.xml",
            f"{BASE}/sitemap-posts.xml",
            f"{BASE}/sitemap-services.xml",
            f"{BASE}/sitemap-projects.xml",
        ]
        assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')

    def test_pages_start_with_home(self):
        urls = locs(sitemap_service.build_pages(BASE))

        assert urls[0] == BASE
        assert f"{BASE}/blog" in urls

    def test_post_entries(self, fake_db, post_row, draft_row):
        fake_db.tables["posts"] = [post_row, draft_row]

        urls = sitemap_service.content_urls(blog_api, BASE)

        assert len(urls) == 1
        assert urls[0].loc == f"{BASE}/blog/hello-world"
        assert urls[0].lastmod == post_row["updated_at"]
        assert (urls[0].changefreq, urls[0].priority) == ("weekly", 0.9)

    def test_service_priority_override(self, fake_db, service_row):
        fake_db.tables["services"] = [{**service_row, "sitemap_priority": 0.5}]

        (url,) = sitemap_service.content_urls(service_api, BASE)

        assert url.priority == 0.5
        assert url.changefreq == "monthly"

    def test_database_failure_gives_empty_urlset(self, fake_db):
        fake_db.failing_tables.add("posts")

        xml = sitemap_service.build_content(blog_api, BASE)

        assert locs(xml) == []
        assert "urlset" in xml

    def test_robots(self):
        robots = sitemap_service.build_robots(BASE)

        assert "Disallow: /api/" in robots
        assert "Disallow: /dashboard/" in robots
        assert f"Sitemap: {BASE}/sitemap.xml" in robots


class TestEndpoints:
    """HTTP responses."""

    @pytest.mark.parametrize(
        "path",
        ["/sitemap.xml", "/sitemap-pages.xml", "/sitemap-posts.xml", "/sitemap-services.xml", "/sitemap-projects.xml"],
    )
    def test_xml_content_type(self, client, path):
        response = client.get(path)

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/xml")

    def test_posts_sitemap(self, client, fake_db, post_row):
        fake_db.tables["posts"] = [post_row]

        response = client.get("/sitemap-posts.xml")

        assert locs(response.text) == [f"{settings.site_url}/blog/hello-world"]

    def test_robots_txt(self, client):
        response = client.get("/robots.txt")

        assert response.headers["content-type"].startswith("text/plain")
        assert "User-agent: *" in response.text

    def test_every_static_page_in_sitemap_is_served(self, client):
        # Arrange
        urls = locs(client.get("/sitemap-pages.xml").text)

        # Act
        paths = [url[len(settings.site_url):] or "/" for url in urls]
        statuses = {path: client.get(path).status_code for path in paths}

        # Assert
        assert "/contact" in statuses
        assert statuses == {path: 200 for path in paths}
