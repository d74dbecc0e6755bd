# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase table operations.
# It implements the singleton pattern to reuse a single client connection
# and exposes the small set of table operations the content layer needs:
# - Filtered, ordered selects (with column projection)
# - Single-row lookup by column value
# - Insert / update / delete
#
# Every SDK failure is re-raised as SupabaseClientError so callers can tell a
# failed query apart from an empty result.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   rows = SupabaseClient.fetch_rows("posts", filters={"status": "published"})
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a machine-readable code plus a suggestion for fixing it. The
    message is meant for logs; HTTP handlers never forward it to clients.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        # Published posts, newest first
        posts = SupabaseClient.fetch_rows(
            "posts",
            filters={"status": "published"},
            order_by="updated_at",
        )

        # One project by slug
        project = SupabaseClient.fetch_one("projects", "slug", "my-project")
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_SERVICE_KEY in your .env file"
                )
        return cls._instance

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_rows(
        cls,
        table: str,
        columns: str = "*",
        filters: dict[str, Any] | None = None,
        excludes: dict[str, Any] | None = None,
        order_by: str | None = None,
        desc: bool = True,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Fetch rows from a table.

        Args:
            table: Table name
            columns: PostgREST column projection (default: all columns)
            filters: Equality filters, column -> value
            excludes: Inequality filters, column -> value
            order_by: Column to sort by (default: table order)
            desc: Sort descending (newest first) when order_by is set
            limit: Maximum number of rows

        Returns:
            List of row dicts, empty when nothing matches

        Raises:
            SupabaseClientError: If the query fails
        """
        client = cls.get_client()

        try:
            query = client.table(table).select(columns)

            for column, value in (filters or {}).items():
                query = query.eq(column, value)
            for column, value in (excludes or {}).items():
                query = query.neq(column, value)

            if order_by:
                query = query.order(order_by, desc=desc)
            if limit is not None:
                query = query.limit(limit)

            response = query.execute()
            rows = response.data or []

            logger.debug(f"Fetched {len(rows)} rows from {table}")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch rows from {table}: {e}",
                code="FETCH_ROWS_FAILED",
                suggestion=f"Check that the {table} table exists and the selected columns are valid",
                details={"table": table, "columns": columns, "filters": filters or {}}
            )

    @classmethod
    def fetch_one(
        cls,
        table: str,
        column: str,
        value: Any,
        filters: dict[str, Any] | None = None,
    ) -> dict[str, Any] | None:
        """
        Fetch the first row where `column` equals `value`.

        Returns:
            Row dict, or None if no row matches

        Raises:
            SupabaseClientError: If the query fails
        """
        rows = cls.fetch_rows(
            table,
            filters={column: value, **(filters or {})},
            limit=1,
        )
        return rows[0] if rows else None

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @classmethod
    def insert_row(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert one row and return it as stored.

        Raises:
            SupabaseClientError: If the insert fails or returns nothing
        """
        client = cls.get_client()

        try:
            response = client.table(table).insert(data).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                suggestion="Check for a duplicate slug or a missing required column",
                details={"table": table, "slug": data.get("slug")}
            )

        if not response.data:
            raise SupabaseClientError(
                message=f"Insert into {table} returned no data",
                code="INSERT_EMPTY",
                details={"table": table}
            )

        logger.info(f"Inserted row {response.data[0].get('id')} into {table}")
        return response.data[0]

    @classmethod
    def update_rows(
        cls,
        table: str,
        data: dict[str, Any],
        column: str,
        value: Any,
    ) -> list[dict[str, Any]]:
        """
        Update rows where `column` equals `value`.

        Returns:
            The updated rows (empty list when nothing matched)

        Raises:
            SupabaseClientError: If the update fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .update(data)
                .eq(column, value)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table}: {e}",
                code="UPDATE_FAILED",
                details={"table": table, column: value}
            )

    @classmethod
    def delete_rows(cls, table: str, column: str, value: Any) -> int:
        """
        Delete rows where `column` equals `value`.

        Deleting a row that does not exist is not an error.

        Returns:
            Number of rows removed

        Raises:
            SupabaseClientError: If the delete fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .delete()
                .eq(column, value)
                .execute()
            )
            removed = len(response.data or [])
            logger.info(f"Deleted {removed} row(s) from {table} where {column}={value}")
            return removed

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, column: value}
            )
