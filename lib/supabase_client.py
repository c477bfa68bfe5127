# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and exposes the table-scoped operations every service needs:
# - select rows with equality filters and ordering
# - fetch a single row (None when nothing matches)
# - insert / update / delete scoped by equality filters
# - exact row counts
#
# The class itself satisfies core.stores.RecordStore, so services can take
# either SupabaseClient or an in-memory double.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   brands = SupabaseClient.select("brands", order_by="name")
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client, ClientOptions

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code returned by .single() when no row matches
NO_ROWS_CODE = "PGRST116"

# Postgres unique_violation
UNIQUE_VIOLATION_CODE = "23505"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Keeps the store's own message intact so it can be shown to the user
    verbatim. `pg_code` holds the Postgres/PostgREST error code when the
    store reported one.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        pg_code: str | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}
        self.pg_code = pg_code

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result

    @property
    def is_unique_violation(self) -> bool:
        return self.pg_code == UNIQUE_VIOLATION_CODE or UNIQUE_VIOLATION_CODE in self.message


def _error_code(error: Exception) -> str | None:
    """Pull the PostgREST/Postgres code off an APIError, if any."""
    code = getattr(error, "code", None)
    return str(code) if code else None


def _is_no_rows(error: Exception) -> bool:
    return _error_code(error) == NO_ROWS_CODE or NO_ROWS_CODE in str(error)


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Implements singleton pattern - one client instance is shared across
    the application. All methods are class methods for easy access without
    instantiation.

    Example:
        brands = SupabaseClient.select("brands", order_by="name")
        brand = SupabaseClient.fetch_one("brands", {"slug": "berelvant"})
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

    @classmethod
    def create_anon_client(cls) -> Client:
        """
        Create a fresh client authenticated with the anon key.

        Auth flows (sign-up, sign-in) store the user's session on the client
        that ran them, so each flow gets its own client instead of the
        shared service-role singleton. The session belongs to the caller:
        the client neither refreshes it in the background nor persists it.
        """
        try:
            return create_client(
                settings.SUPABASE_URL,
                settings.SUPABASE_ANON_KEY,
                options=ClientOptions(auto_refresh_token=False, persist_session=False),
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase auth client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
            )

    @classmethod
    def _normalize_uuid(cls, uuid_value: Any) -> Any:
        """Convert UUID to string for queries."""
        return str(uuid_value) if isinstance(uuid_value, UUID) else uuid_value

    @classmethod
    def _apply_filters(cls, query: Any, filters: dict[str, Any] | None) -> Any:
        for column, value in (filters or {}).items():
            query = query.eq(column, cls._normalize_uuid(value))
        return query

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @classmethod
    def select(
        cls,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        desc: bool = False,
        columns: str = "*",
    ) -> list[dict[str, Any]]:
        """
        Fetch rows from a table or view.

        Args:
            table: Table or view name
            filters: Column -> value equality filters (ANDed)
            order_by: Column to sort by (store order when omitted)
            desc: Sort descending
            columns: PostgREST column list

        Returns:
            List of row dicts (empty when nothing matches)

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            query = cls._apply_filters(client.table(table).select(columns), filters)
            if order_by:
                query = query.order(order_by, desc=desc)

            response = query.execute()
            rows = response.data or []

            logger.debug(f"Fetched {len(rows)} rows from {table}")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch {table}: {e}",
                code="FETCH_FAILED",
                details={"table": table, "filters": filters or {}},
                pg_code=_error_code(e),
            )

    @classmethod
    def fetch_one(
        cls,
        table: str,
        filters: dict[str, Any],
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """
        Fetch exactly one row.

        Returns:
            Row dict, or None if no row matches

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                cls._apply_filters(client.table(table).select(columns), filters)
                .single()
                .execute()
            )

            return response.data

        except Exception as e:
            # PostgREST reports "no rows" as an error for .single()
            if _is_no_rows(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code="FETCH_ROW_FAILED",
                details={"table": table, "filters": filters},
                pg_code=_error_code(e),
            )

    @classmethod
    def count(cls, table: str) -> int:
        """
        Exact number of rows in a table.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .select("id", count="exact")
                .limit(1)
                .execute()
            )
            return response.count or 0

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to count {table}: {e}",
                code="COUNT_FAILED",
                details={"table": table},
                pg_code=_error_code(e),
            )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @classmethod
    def insert(cls, table: str, row: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a row and return it as stored (with generated id, timestamps).

        Raises:
            SupabaseClientError: If insert fails or returns nothing
        """
        client = cls.get_client()
        data = {k: cls._normalize_uuid(v) for k, v in row.items()}

        try:
            response = client.table(table).insert(data).execute()

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message=f"Insert into {table} returned no data",
                code="INSERT_NO_DATA"
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table},
                pg_code=_error_code(e),
            )

    @classmethod
    def update(
        cls,
        table: str,
        filters: dict[str, Any],
        values: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Update matching rows.

        Returns:
            The first updated row, or None if nothing matched

        Raises:
            SupabaseClientError: If update fails
        """
        client = cls.get_client()
        data = {k: cls._normalize_uuid(v) for k, v in values.items()}

        try:
            response = cls._apply_filters(client.table(table).update(data), filters).execute()

            if response.data:
                return response.data[0]
            return None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table}: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "filters": filters},
                pg_code=_error_code(e),
            )

    @classmethod
    def delete(cls, table: str, filters: dict[str, Any]) -> list[dict[str, Any]]:
        """
        Delete matching rows.

        Returns:
            The deleted rows (empty if nothing matched)

        Raises:
            SupabaseClientError: If delete fails
        """
        client = cls.get_client()

        try:
            response = cls._apply_filters(client.table(table).delete(), filters).execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete from {table}: {e}",
                code="DELETE_FAILED",
                details={"table": table, "filters": filters},
                pg_code=_error_code(e),
            )
