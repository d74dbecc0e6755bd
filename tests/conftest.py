# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - An in-memory stand-in for the Supabase table query builder
# - A TestClient wired to the fake database and a recording revalidator
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("ADMIN_EMAIL", "admin@udyomx.com")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789")
os.environ.setdefault("GOOGLE_CLIENT_ID", "test-google-client")
os.environ.setdefault("GOOGLE_CLIENT_SECRET", "test-google-secret")
os.environ.setdefault("SITE_URL", "https://udyomx.test")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import copy
from types import SimpleNamespace
from typing import Any

import pytest


# =============================================================================
# Fake Supabase
# =============================================================================

class FakeQuery:
    """
    Chainable query over one in-memory table.

    Supports the subset of the PostgREST builder that lib.supabase_client
    uses: select / insert / update / delete, eq / neq, order, limit, execute.
    """

    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.action = "select"
        self.columns = "*"
        self.payload: Any = None
        self.filters: list[tuple[str, str, Any]] = []
        self.order_column: str | None = None
        self.order_desc = False
        self.row_limit: int | None = None

    # -- actions --------------------------------------------------------------

    def select(self, columns: str = "*"):
        self.action, self.columns = "select", columns
        return self

    def insert(self, data: dict[str, Any]):
        self.action, self.payload = "insert", data
        return self

    def update(self, data: dict[str, Any]):
        self.action, self.payload = "update", data
        return self

    def delete(self):
        self.action = "delete"
        return self

    # -- modifiers ------------------------------------------------------------

    def eq(self, column: str, value: Any):
        self.filters.append(("eq", column, value))
        return self

    def neq(self, column: str, value: Any):
        self.filters.append(("neq", column, value))
        return self

    def order(self, column: str, desc: bool = False):
        self.order_column, self.order_desc = column, desc
        return self

    def limit(self, count: int):
        self.row_limit = count
        return self

    # -- execution ------------------------------------------------------------

    def _matches(self, row: dict[str, Any]) -> bool:
        for op, column, value in self.filters:
            if op == "eq" and row.get(column) != value:
                return False
            if op == "neq" and row.get(column) == value:
                return False
        return True

    def _project(self, row: dict[str, Any]) -> dict[str, Any]:
        if self.columns.strip() == "*":
            return copy.deepcopy(row)
        names = [name.strip() for name in self.columns.split(",")]
        return {name: copy.deepcopy(row.get(name)) for name in names}

    def execute(self):
        self.db.calls.append((self.table, self.action, self.columns))
        if self.table in self.db.failing_tables:
            raise RuntimeError(f"relation {self.table} is unavailable")

        rows = self.db.tables.setdefault(self.table, [])

        if self.action == "insert":
            row = copy.deepcopy(self.payload)
            rows.append(row)
            return SimpleNamespace(data=[copy.deepcopy(row)])

        matched = [row for row in rows if self._matches(row)]

        if self.action == "update":
            for row in matched:
                row.update(copy.deepcopy(self.payload))
            return SimpleNamespace(data=copy.deepcopy(matched))

        if self.action == "delete":
            self.db.tables[self.table] = [row for row in rows if not self._matches(row)]
            return SimpleNamespace(data=copy.deepcopy(matched))

        if self.order_column:
            matched.sort(
                key=lambda row: row.get(self.order_column) or "",
                reverse=self.order_desc,
            )
        if self.row_limit is not None:
            matched = matched[: self.row_limit]
        return SimpleNamespace(data=[self._project(row) for row in matched])


class FakeSupabase:
    """In-memory replacement for supabase.Client."""

    def __init__(self):
        self.tables: dict[str, list[dict[str, Any]]] = {
            "posts": [],
            "projects": [],
            "services": [],
        }
        self.failing_tables: set[str] = set()
        self.calls: list[tuple[str, str, str]] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)


class RecordingRevalidator:
    """Revalidator that remembers the paths it was asked to drop."""

    def __init__(self):
        self.paths: list[str] = []

    def revalidate_path(self, path: str) -> None:
        self.paths.append(path)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_db():
    """Install a FakeSupabase as the SupabaseClient singleton."""
    from lib.supabase_client import SupabaseClient

    db = FakeSupabase()
    previous = SupabaseClient._instance
    SupabaseClient._instance = db
    yield db
    SupabaseClient._instance = previous


@pytest.fixture
def revalidator():
    return RecordingRevalidator()


@pytest.fixture
def client(fake_db, revalidator):
    """TestClient with the fake database and the recording revalidator."""
    from fastapi.testclient import TestClient

    from app.dependencies import get_revalidator, page_cache
    from app.main import app

    app.dependency_overrides[get_revalidator] = lambda: revalidator
    page_cache.clear()
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    page_cache.clear()


@pytest.fixture
def post_row():
    """A published post as stored in the posts table."""
    return {
        "id": "11111111-1111-4111-8111-111111111111",
        "slug": "hello-world",
        "title": "Hello World",
        "excerpt": "First post",
        "content": "## Intro\n\nWelcome to the **blog**.",
        "status": "published",
        "category": "news",
        "tags": ["intro"],
        "thumbnail": "https://cdn.udyomx.test/hello.png",
        "publish_date": "2024-01-10T09:00:00+00:00",
        "created_at": "2024-01-10T09:00:00+00:00",
        "updated_at": "2024-01-12T09:00:00+00:00",
    }


@pytest.fixture
def draft_row():
    """A draft post."""
    return {
        "id": "22222222-2222-4222-8222-222222222222",
        "slug": "work-in-progress",
        "title": "Work in Progress",
        "excerpt": "Not ready",
        "content": "Draft body",
        "status": "draft",
        "category": "news",
        "created_at": "2024-01-11T09:00:00+00:00",
        "updated_at": "2024-01-13T09:00:00+00:00",
    }


@pytest.fixture
def project_row():
    return {
        "id": "33333333-3333-4333-8333-333333333333",
        "slug": "site-builder",
        "name": "Site Builder",
        "description": "Drag and drop websites",
        "status": "published",
        "featured": True,
        "tech_stack": ["python", "fastapi"],
        "created_at": "2024-02-01T09:00:00+00:00",
        "updated_at": "2024-02-02T09:00:00+00:00",
    }


@pytest.fixture
def service_row():
    return {
        "id": "44444444-4444-4444-8444-444444444444",
        "slug": "web-development",
        "title": "Web Development",
        "hook_line": "Sites that load fast",
        "description": "Full-stack builds",
        "status": "published",
        "indexable": True,
        "created_at": "2024-03-01T09:00:00+00:00",
        "updated_at": "2024-03-02T09:00:00+00:00",
    }
