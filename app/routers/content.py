# =============================================================================
# app/routers/content.py - Content CRUD Endpoints
# =============================================================================
# One router per content kind, all built by build_content_router():
#
#   /api/blogs, /api/projects, /api/services
#
#   GET                 published list
#   GET ?slug=X         one entity (drafts included)
#   GET ?fields=card    published list, card projection
#   GET ?admin=true     every row, drafts included
#   GET ?featured=true  published featured rows (projects)
#   GET ?category=X     published rows in a category
#   POST                create, 201
#   PUT                 update, body must carry "id"
#   DELETE ?id=X        delete, idempotent
#
# Database failures become 500 {"error": "Failed to <verb> <label>"}; the
# underlying error is logged, never returned. After every successful write
# the entity's page, its listing and the home page are revalidated.
# =============================================================================

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body

from app.dependencies import RevalidationDep
from app.exceptions import ContentNotFoundError, ContentOperationError, MissingFieldError
from core.services.content_service import ContentService, blog_api, project_api, service_api
from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)


def build_content_router(service: ContentService) -> APIRouter:
    """
    CRUD router for one content kind.

    Mounted with the kind's prefix in main.py, e.g. /api/blogs.
    """
    router = APIRouter()
    schema = service.schema
    label = schema.label
    plural = schema.plural

    # =========================================================================
    # Reads
    # =========================================================================

    @router.get("")
    def read_content(
        slug: Optional[str] = None,
        fields: Optional[str] = None,
        admin: Optional[str] = None,
        featured: Optional[str] = None,
        category: Optional[str] = None,
    ) -> Any:
        try:
            if slug:
                entity = service.get_by_slug(slug)
                logger.info(f"GET {schema.base_path} slug={slug}: found {entity.id}")
                return entity.to_json()

            if fields == "card":
                items = service.get_all_for_cards()
            elif admin == "true":
                items = service.get_all_admin()
            elif featured == "true":
                items = service.get_featured()
            elif category:
                items = service.get_by_category(category)
            else:
                items = service.get_all()
        except SupabaseClientError as e:
            raise ContentOperationError(f"Failed to fetch {plural}", cause=e)

        logger.info(f"GET {schema.base_path}: returning {len(items)} {plural}")
        return [item.to_json() for item in items]

    # =========================================================================
    # Writes
    # =========================================================================

    @router.post("", status_code=201)
    def create_content(
        revalidation: RevalidationDep,
        data: dict[str, Any] = Body(...),
    ) -> Any:
        try:
            entity = service.create(data)
        except SupabaseClientError as e:
            raise ContentOperationError(f"Failed to create {label}", cause=e)

        revalidation.revalidate_entity(schema.kind, entity.slug)
        return entity.to_json()

    @router.put("")
    def update_content(
        revalidation: RevalidationDep,
        data: dict[str, Any] = Body(...),
    ) -> Any:
        entity_id = data.get("id")
        if not entity_id:
            raise MissingFieldError(f"{label.capitalize()} ID required", field="id")

        try:
            previous_slug = service.get_by_id(str(entity_id)).slug
            entity = service.update(str(entity_id), data)
        except SupabaseClientError as e:
            raise ContentOperationError(f"Failed to update {label}", cause=e)

        revalidation.revalidate_entity(schema.kind, entity.slug, previous_slug=previous_slug)
        return entity.to_json()

    @router.delete("")
    def delete_content(
        revalidation: RevalidationDep,
        id: Optional[str] = None,
    ) -> dict[str, bool]:
        if not id:
            raise MissingFieldError("ID required", field="id")

        try:
            try:
                slug = service.get_by_id(id).slug
            except ContentNotFoundError:
                slug = None
            service.delete(id)
        except SupabaseClientError as e:
            raise ContentOperationError(f"Failed to delete {label}", cause=e)

        logger.info(f"DELETE {schema.base_path}: {id}")
        if slug:
            revalidation.revalidate_entity(schema.kind, slug)
        else:
            revalidation.revalidate(schema.base_path, schema.kind.value)
        return {"success": True}

    return router


blogs = build_content_router(blog_api)
projects = build_content_router(project_api)
services = build_content_router(service_api)
