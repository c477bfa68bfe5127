# =============================================================================
# core/services/record_service.py - Client & Workflow CRUD
# =============================================================================
# Clients and workflows share one shape: list newest-first, get / create /
# update / delete by id. No business rules beyond the status enums that the
# request models validate.
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable
from uuid import UUID

from lib.supabase_client import SupabaseClient
from lib.utils import normalize_uuid, to_iso, utc_now
from core.stores import RecordStore
from app.exceptions import RecordNotFoundError

logger = logging.getLogger(__name__)


class RecordService:
    """
    Generic CRUD over one record store table.

    Subclasses set `table`.
    """

    table: str = ""

    def __init__(
        self,
        records: RecordStore = SupabaseClient,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.records = records
        self.clock = clock

    def list(self) -> list[dict[str, Any]]:
        """All rows, most recently created first."""
        return self.records.select(self.table, order_by="created_at", desc=True)

    def get(self, record_id: str | UUID) -> dict[str, Any]:
        record_id_str = normalize_uuid(record_id)
        row = self.records.fetch_one(self.table, {"id": record_id_str})
        if not row:
            raise RecordNotFoundError(self.table, record_id_str)
        return row

    def create(self, fields: dict[str, Any]) -> dict[str, Any]:
        row = self.records.insert(self.table, fields)
        logger.info(f"Created {self.table} row: {row.get('id')}")
        return row

    def update(self, record_id: str | UUID, fields: dict[str, Any]) -> dict[str, Any]:
        """
        Write the given fields and refresh updated_at.

        An empty field set still touches updated_at; callers that want a
        no-op should not call update.

        Raises:
            RecordNotFoundError: If no row has this id
        """
        record_id_str = normalize_uuid(record_id)
        values = {**fields, "updated_at": to_iso(self.clock())}

        row = self.records.update(self.table, {"id": record_id_str}, values)
        if not row:
            raise RecordNotFoundError(self.table, record_id_str)

        logger.info(f"Updated {self.table} row: {record_id_str}")
        return row

    def delete(self, record_id: str | UUID) -> None:
        record_id_str = normalize_uuid(record_id)
        deleted = self.records.delete(self.table, {"id": record_id_str})
        if not deleted:
            raise RecordNotFoundError(self.table, record_id_str)
        logger.info(f"Deleted {self.table} row: {record_id_str}")


class ClientService(RecordService):
    """Clients being onboarded (status: active / paused / completed)."""

    table = "clients"

    def create(
        self,
        fields: dict[str, Any],
        created_by: str | UUID | None = None,
    ) -> dict[str, Any]:
        if created_by is not None:
            fields = {**fields, "created_by": normalize_uuid(created_by)}
        return super().create(fields)


class WorkflowService(RecordService):
    """Onboarding workflows (status: draft / active / archived)."""

    table = "workflows"
