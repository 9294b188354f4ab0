# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations.
# It implements the singleton pattern to reuse a single client connection
# and provides specialized methods for:
# - Subscription lookups (platform_subscriptions)
# - Per-creator row counts for limited resources
# - Generic row fetch/insert/delete used by the resource services
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   row = SupabaseClient.fetch_subscription(user_id)
# =============================================================================

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import settings
from lib.utils import normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code returned by .single() when no row matches
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    Carries a code and a suggestion so callers can log or surface
    something more useful than the raw PostgREST message.
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
        subscription = SupabaseClient.fetch_subscription(user_id)
        count = SupabaseClient.count_owned_rows("products", user_id)
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Uses service_role key which bypasses Row Level Security (RLS).
        Ownership checks are therefore done in the service layer.

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
    # Subscriptions
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_subscription(cls, user_id: str | UUID) -> dict[str, Any] | None:
        """
        Fetch a user's platform subscription row.

        Args:
            user_id: The user UUID

        Returns:
            Subscription dict, or None if the user never picked a plan

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        user_id_str = normalize_uuid(user_id)

        try:
            response = (
                client.table("platform_subscriptions")
                .select("*")
                .eq("user_id", user_id_str)
                .limit(1)
                .execute()
            )

            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch subscription: {e}",
                code="FETCH_SUBSCRIPTION_FAILED",
                suggestion="Check that the platform_subscriptions table exists and is accessible",
                details={"user_id": user_id_str}
            )

    @classmethod
    def update_subscription(
        cls,
        user_id: str | UUID,
        values: dict[str, Any],
    ) -> dict[str, Any] | None:
        """
        Update a user's subscription row.

        Returns:
            The updated row, or None if the user has no subscription

        Raises:
            SupabaseClientError: If update fails
        """
        client = cls.get_client()
        user_id_str = normalize_uuid(user_id)

        try:
            response = (
                client.table("platform_subscriptions")
                .update(values)
                .eq("user_id", user_id_str)
                .execute()
            )
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update subscription: {e}",
                code="UPDATE_SUBSCRIPTION_FAILED",
                details={"user_id": user_id_str, "fields": sorted(values)}
            )

    # -------------------------------------------------------------------------
    # Counting
    # -------------------------------------------------------------------------

    @classmethod
    def count_owned_rows(cls, table: str, creator_id: str | UUID) -> int:
        """
        Count rows in `table` whose creator_id is the given user.

        Uses PostgREST's exact count so only one row travels back.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        creator_id_str = normalize_uuid(creator_id)

        try:
            response = (
                client.table(table)
                .select("id", count="exact")
                .eq("creator_id", creator_id_str)
                .limit(1)
                .execute()
            )

            count = response.count or 0
            logger.debug(f"Counted {count} {table} rows for creator {creator_id_str}")
            return count

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to count {table}: {e}",
                code="COUNT_FAILED",
                suggestion=f"Check that the {table} table has a creator_id column",
                details={"table": table, "creator_id": creator_id_str}
            )

    # -------------------------------------------------------------------------
    # Generic Row Operations
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_row(
        cls,
        table: str,
        row_id: str | UUID,
        columns: str = "*",
    ) -> dict[str, Any] | None:
        """
        Fetch a single row by primary key.

        Returns:
            Row dict, or None if not found

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()
        row_id_str = normalize_uuid(row_id)

        try:
            response = (
                client.table(table)
                .select(columns)
                .eq("id", row_id_str)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code="FETCH_ROW_FAILED",
                details={"table": table, "id": row_id_str}
            )

    @classmethod
    def fetch_rows(
        cls,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str = "created_at",
        limit: int = 50,
        offset: int = 0,
    ) -> list[dict[str, Any]]:
        """
        Fetch rows matching equality filters, newest first.

        Raises:
            SupabaseClientError: If query fails
        """
        client = cls.get_client()

        query = client.table(table).select("*")
        for column, value in (filters or {}).items():
            query = query.eq(column, normalize_uuid(value))
        query = query.order(order_by, desc=True).range(offset, offset + limit - 1)

        try:
            response = query.execute()
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to list {table}: {e}",
                code="FETCH_ROWS_FAILED",
                details={"table": table, "filters": {k: str(v) for k, v in (filters or {}).items()}}
            )

    @classmethod
    def insert_row(cls, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a row and return it with generated columns.

        Raises:
            SupabaseClientError: If insert fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(table)
                .insert(data)
                .execute()
            )

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": table}
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table}
            )

    @classmethod
    def delete_row(cls, table: str, row_id: str | UUID) -> None:
        """
        Delete a row by primary key.

        Raises:
            SupabaseClientError: If delete fails
        """
        client = cls.get_client()
        row_id_str = normalize_uuid(row_id)

        try:
            client.table(table).delete().eq("id", row_id_str).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete {table} row: {e}",
                code="DELETE_FAILED",
                details={"table": table, "id": row_id_str}
            )
