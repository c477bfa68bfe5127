# =============================================================================
# core/stores.py - External Store Interfaces
# =============================================================================
# The two external services every brand/asset operation goes through:
# - RecordStore: table-scoped CRUD with equality filters and ordering
#   (implemented by lib.supabase_client.SupabaseClient)
# - BlobStore: bytes addressed by object key in one bucket
#   (implemented by core.services.storage_service.StorageService)
#
# Services depend on these protocols only, so tests can hand them
# in-memory doubles. Failures are raised, never returned.
# =============================================================================

from __future__ import annotations

from typing import Any, Protocol


class RecordStore(Protocol):
    """Table/view access with equality filters."""

    def select(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        order_by: str | None = None,
        desc: bool = False,
        columns: str = "*",
    ) -> list[dict[str, Any]]: ...

    def fetch_one(
        self,
        table: str,
        filters: dict[str, Any],
        columns: str = "*",
    ) -> dict[str, Any] | None: ...

    def count(self, table: str) -> int: ...

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]: ...

    def update(
        self,
        table: str,
        filters: dict[str, Any],
        values: dict[str, Any],
    ) -> dict[str, Any] | None: ...

    def delete(self, table: str, filters: dict[str, Any]) -> list[dict[str, Any]]: ...


class BlobStore(Protocol):
    """Object storage for one bucket."""

    def put(self, path: str, content: bytes, content_type: str | None = None) -> str: ...

    def get(self, path: str) -> bytes: ...

    def list(self, prefix: str) -> list[dict[str, Any]]: ...

    def remove(self, paths: list[str]) -> None: ...

    def public_url(self, path: str) -> str: ...


__all__ = ["RecordStore", "BlobStore"]
