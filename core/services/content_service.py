# =============================================================================
# core/services/content_service.py - Content Business Logic
# =============================================================================
# One generic service drives all three content kinds. What differs between
# posts, projects and services (table, model, title/excerpt columns, public
# path) lives in a ContentSchema; the queries are written once.
#
# Views:
# - get_all():           published rows, full detail, newest update first
# - get_all_for_cards(): same rows and order, reduced column projection
# - get_all_admin():     every row regardless of status
#
# The service holds no state between calls and never touches the page
# cache; route handlers decide what to revalidate after a write.
#
# Usage:
#   from core.services.content_service import blog_api
#   posts = blog_api.get_all()
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from app.exceptions import ContentNotFoundError, InvalidContentError
from core.models.content import (
    ContentBase,
    ContentCard,
    ContentKind,
    ContentStatus,
    Post,
    Project,
    Service,
)
from lib.slugs import estimate_read_time, is_valid_slug, unique_slug
from lib.supabase_client import SupabaseClient
from lib.utils import generate_id, utc_now

logger = logging.getLogger(__name__)

ORDER_COLUMN = "updated_at"

# Never taken from a request body on update
_PROTECTED_FIELDS = {"id", "kind", "created_at", "updated_at"}


@dataclass(frozen=True)
class ContentSchema:
    """Everything that distinguishes one content kind from another."""

    kind: ContentKind
    table: str
    model: type[ContentBase]
    label: str  # singular, for messages: "blog"
    plural: str  # "blogs"
    base_path: str  # public listing path, also the detail prefix
    title_column: str = "title"
    excerpt_column: str = "excerpt"
    featured_column: str | None = None
    sitemap_changefreq: str = "monthly"
    sitemap_priority: float = 0.7

    @property
    def card_columns(self) -> str:
        return (
            f"id, slug, {self.title_column}, {self.excerpt_column}, "
            "thumbnail, cover_image, category, publish_date"
        )

    def detail_path(self, slug: str) -> str:
        return f"{self.base_path}/{slug}"


POSTS = ContentSchema(
    kind=ContentKind.POST,
    table="posts",
    model=Post,
    label="blog",
    plural="blogs",
    base_path="/blog",
    sitemap_changefreq="weekly",
    sitemap_priority=0.9,
)

PROJECTS = ContentSchema(
    kind=ContentKind.PROJECT,
    table="projects",
    model=Project,
    label="project",
    plural="projects",
    base_path="/projects",
    title_column="name",
    excerpt_column="description",
    featured_column="featured",
    sitemap_changefreq="monthly",
    sitemap_priority=0.7,
)

SERVICES = ContentSchema(
    kind=ContentKind.SERVICE,
    table="services",
    model=Service,
    label="service",
    plural="services",
    base_path="/services",
    excerpt_column="description",
    sitemap_changefreq="monthly",
    sitemap_priority=0.9,
)

CONTENT_SCHEMAS: dict[ContentKind, ContentSchema] = {
    schema.kind: schema for schema in (POSTS, PROJECTS, SERVICES)
}


class ContentService:
    """
    CRUD and view queries for one content kind.

    Not-found is always ContentNotFoundError; a failed query is always
    SupabaseClientError. Callers never have to guess from an empty result.
    """

    def __init__(self, schema: ContentSchema, db: type[SupabaseClient] = SupabaseClient):
        self.schema = schema
        self.db = db

    @property
    def model(self) -> type[ContentBase]:
        return self.schema.model

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_all(self) -> list[ContentBase]:
        """Published rows, most recently updated first."""
        rows = self.db.fetch_rows(
            self.schema.table,
            filters={"status": ContentStatus.PUBLISHED.value},
            order_by=ORDER_COLUMN,
        )
        return [self.model.model_validate(row) for row in rows]

    def get_all_for_cards(self, limit: int | None = None) -> list[ContentCard]:
        """
        Same selection and order as get_all(), projected to card fields.

        Only the card columns are requested from the database.
        """
        rows = self.db.fetch_rows(
            self.schema.table,
            columns=self.schema.card_columns,
            filters={"status": ContentStatus.PUBLISHED.value},
            order_by=ORDER_COLUMN,
            limit=limit,
        )
        return [self._to_card(row) for row in rows]

    def get_all_admin(self) -> list[ContentBase]:
        """Every row, drafts included, for the dashboard."""
        rows = self.db.fetch_rows(self.schema.table, order_by=ORDER_COLUMN)
        return [self.model.model_validate(row) for row in rows]

    def get_latest(self, limit: int = 3) -> list[ContentCard]:
        """Newest published cards, for the home page widget."""
        return self.get_all_for_cards(limit=limit)

    def get_by_category(self, category: str) -> list[ContentBase]:
        rows = self.db.fetch_rows(
            self.schema.table,
            filters={"status": ContentStatus.PUBLISHED.value, "category": category},
            order_by=ORDER_COLUMN,
        )
        return [self.model.model_validate(row) for row in rows]

    def get_featured(self) -> list[ContentBase]:
        """Published rows flagged as featured. Empty for kinds without the flag."""
        if not self.schema.featured_column:
            return []
        rows = self.db.fetch_rows(
            self.schema.table,
            filters={
                "status": ContentStatus.PUBLISHED.value,
                self.schema.featured_column: True,
            },
            order_by=ORDER_COLUMN,
        )
        return [self.model.model_validate(row) for row in rows]

    def get_by_slug(self, slug: str, published_only: bool = False) -> ContentBase:
        """
        The row with this slug.

        Args:
            slug: Public identifier
            published_only: Treat drafts as missing (public pages)

        Raises:
            ContentNotFoundError: If no row matches
            SupabaseClientError: If the query fails
        """
        filters = {"status": ContentStatus.PUBLISHED.value} if published_only else None
        row = self.db.fetch_one(self.schema.table, "slug", slug, filters=filters)

        if row is None:
            raise ContentNotFoundError(self.schema.label, "slug", slug)
        return self.model.model_validate(row)

    def get_by_id(self, entity_id: str) -> ContentBase:
        row = self.db.fetch_one(self.schema.table, "id", entity_id)

        if row is None:
            raise ContentNotFoundError(self.schema.label, "id", entity_id)
        return self.model.model_validate(row)

    def get_sitemap_rows(self) -> list[dict[str, Any]]:
        """slug / updated_at / created_at of every published row."""
        columns = "slug, updated_at, created_at"
        if self.schema.kind == ContentKind.SERVICE:
            columns += ", indexable, sitemap_priority"

        rows = self.db.fetch_rows(
            self.schema.table,
            columns=columns,
            filters={"status": ContentStatus.PUBLISHED.value},
            order_by=ORDER_COLUMN,
        )
        # indexable = false opts a row out of search engines
        return [row for row in rows if row.get("indexable") is not False]

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create(self, data: dict[str, Any]) -> ContentBase:
        """
        Insert a new row.

        Generates the slug from the title when none is given, and an id when
        none is supplied.

        Raises:
            InvalidContentError: If the body is not a valid entity
            SupabaseClientError: If the insert fails
        """
        payload = {key: value for key, value in data.items() if key != "kind"}
        entity = self._validate(payload)

        generated = not entity.slug
        if generated:
            taken = [row["slug"] for row in self.db.fetch_rows(self.schema.table, columns="slug")]
            entity.slug = unique_slug(entity.display_title, taken)
        self._check_slug(entity.slug)
        if not generated:
            self._check_slug_available(entity.slug)

        now = utc_now()
        entity.id = entity.id or generate_id()
        entity.created_at = now
        entity.updated_at = now
        entity.publish_date = entity.publish_date or now
        self._derive_fields(entity, changed=set(entity.model_fields_set) | {"content"})

        row = self.db.insert_row(self.schema.table, entity.to_row())
        logger.info(f"Created {self.schema.label} {row.get('id')} ({entity.slug})")
        return self.model.model_validate(row)

    def update(self, entity_id: str, data: dict[str, Any]) -> ContentBase:
        """
        Patch an existing row with the fields present in `data`.

        An empty `slug` in the patch regenerates it from the title.

        Raises:
            ContentNotFoundError: If no row has this id
            InvalidContentError: If the merged entity is invalid
            SupabaseClientError: If the update fails
        """
        existing = self.get_by_id(entity_id)
        patch = self._field_names(data)

        entity = self._validate({**existing.model_dump(), **patch})
        if not entity.slug:
            taken = [row["slug"] for row in self.db.fetch_rows(self.schema.table, columns="slug")]
            entity.slug = unique_slug(entity.display_title, taken, current=existing.slug)
        self._check_slug(entity.slug)
        if entity.slug != existing.slug:
            self._check_slug_available(entity.slug, entity_id)

        entity.updated_at = utc_now()
        changed = set(patch) | {"updated_at"}
        changed |= self._derive_fields(entity, changed=changed)

        rows = self.db.update_rows(
            self.schema.table,
            entity.to_row(include=changed),
            "id",
            entity_id,
        )
        if not rows:
            # Deleted between the lookup and the update
            raise ContentNotFoundError(self.schema.label, "id", entity_id)

        logger.info(f"Updated {self.schema.label} {entity_id}: {sorted(changed)}")
        return self.model.model_validate(rows[0])

    def delete(self, entity_id: str) -> None:
        """Remove a row. Removing a missing id succeeds."""
        self.db.delete_rows(self.schema.table, "id", entity_id)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _validate(self, payload: dict[str, Any]) -> ContentBase:
        try:
            return self.model.model_validate(payload)
        except ValidationError as e:
            raise InvalidContentError(self.schema.label, str(e))

    def _check_slug(self, slug: str) -> None:
        if not is_valid_slug(slug):
            raise InvalidContentError(self.schema.label, f"Invalid slug: {slug!r}")

    def _check_slug_available(self, slug: str, entity_id: str | None = None) -> None:
        row = self.db.fetch_one(self.schema.table, "slug", slug)
        if row is not None and row.get("id") != entity_id:
            raise InvalidContentError(self.schema.label, f"Slug already in use: {slug!r}")

    def _field_names(self, data: dict[str, Any]) -> dict[str, Any]:
        """Map camelCase keys and synonyms to field names; drop unknown keys."""
        names: dict[str, str] = {}
        for name, info in self.model.model_fields.items():
            names[name] = name
            if info.alias:
                names[info.alias] = name

        patch: dict[str, Any] = {}
        for key, value in data.items():
            name = names.get(key) or self.model.input_synonyms.get(key)
            if name and name not in _PROTECTED_FIELDS:
                patch.setdefault(name, value)
        return patch

    def _derive_fields(self, entity: ContentBase, changed: set[str]) -> set[str]:
        """Fill computed fields. Returns the names it set."""
        if (
            isinstance(entity, Post)
            and entity.content
            and "content" in changed
            and "read_time" not in changed
        ):
            entity.read_time = estimate_read_time(entity.content)
            return {"read_time"}
        return set()

    def _to_card(self, row: dict[str, Any]) -> ContentCard:
        return ContentCard(
            kind=self.schema.kind,
            id=row["id"],
            slug=row["slug"],
            title=row.get(self.schema.title_column) or "",
            excerpt=row.get(self.schema.excerpt_column) or "",
            thumbnail=row.get("thumbnail") or row.get("cover_image"),
            category=row.get("category"),
            date=row.get("publish_date"),
        )


# Facades, one per kind
blog_api = ContentService(POSTS)
project_api = ContentService(PROJECTS)
service_api = ContentService(SERVICES)

_SERVICES_BY_KIND = {
    ContentKind.POST: blog_api,
    ContentKind.PROJECT: project_api,
    ContentKind.SERVICE: service_api,
}


def get_content_service(kind: ContentKind) -> ContentService:
    return _SERVICES_BY_KIND[kind]
