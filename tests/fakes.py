# =============================================================================
# tests/fakes.py - In-Memory Store Doubles
# =============================================================================
# RecordStore / BlobStore implementations that keep everything in dicts so
# service and API tests run without Supabase. Both record every call in
# `calls` so tests can assert ordering, and both can be told to fail.
# =============================================================================

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timedelta, timezone
from typing import Any
from urllib.parse import quote
from uuid import uuid4

from app.exceptions import StorageDeleteError, StorageDownloadError, StorageUploadError
from lib.supabase_client import SupabaseClientError
from lib.utils import to_iso

PUBLIC_BASE_URL = "https://test-project.supabase.co/storage/v1/object/public/brand-assets"

# Columns a Postgres default would fill in, per table
_TIMESTAMP_DEFAULTS = {
    "brands": ("created_at", "updated_at"),
    "clients": ("created_at", "updated_at"),
    "workflows": ("created_at", "updated_at"),
    "assets": ("uploaded_at",),
}


class FakeClock:
    """Callable clock that moves forward one second per reading."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(seconds=1)):
        self.now = start or datetime(2024, 6, 10, 12, 0, 0, tzinfo=timezone.utc)
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


def _matches(row: dict[str, Any], filters: dict[str, Any] | None) -> bool:
    return all(str(row.get(k)) == str(v) for k, v in (filters or {}).items())


class InMemoryRecordStore:
    """
    Table store with equality filters, ordering and unique constraints.

    `fail_on[(op, table)] = exc` makes that operation raise.
    """

    def __init__(self, unique: dict[str, list[str]] | None = None):
        self.tables: dict[str, list[dict[str, Any]]] = defaultdict(list)
        self.unique = unique if unique is not None else {"brands": ["slug"]}
        self.fail_on: dict[tuple[str, str], Exception] = {}
        self.calls: list[tuple[str, str]] = []
        self._clock = FakeClock(datetime(2024, 1, 1, tzinfo=timezone.utc))

    def _check_failure(self, op: str, table: str) -> None:
        self.calls.append((op, table))
        error = self.fail_on.get((op, table))
        if error is not None:
            raise error

    def _rows(self, table: str) -> list[dict[str, Any]]:
        if table == "brands_with_assets":
            return self._brands_with_assets()
        return self.tables[table]

    def _brands_with_assets(self) -> list[dict[str, Any]]:
        rows = []
        for brand in self.tables["brands"]:
            assets = [
                {k: v for k, v in a.items() if k != "brand_id"}
                for a in self.tables["assets"]
                if a["brand_id"] == brand["id"]
            ]
            assets.sort(key=lambda a: a["uploaded_at"], reverse=True)
            rows.append({
                "id": brand["id"],
                "name": brand["name"],
                "slug": brand["slug"],
                "assets_json": {
                    "brand": {
                        "id": brand["id"],
                        "name": brand["name"],
                        "slug": brand["slug"],
                        "description": brand.get("description"),
                    },
                    "assets": assets,
                },
            })
        return rows

    # RecordStore -------------------------------------------------------------

    def select(self, table, filters=None, order_by=None, desc=False, columns="*"):
        self._check_failure("select", table)
        rows = [dict(r) for r in self._rows(table) if _matches(r, filters)]
        if order_by:
            rows.sort(key=lambda r: r.get(order_by) or "", reverse=desc)
        return rows

    def fetch_one(self, table, filters, columns="*"):
        self._check_failure("fetch_one", table)
        rows = [dict(r) for r in self._rows(table) if _matches(r, filters)]
        return rows[0] if rows else None

    def count(self, table):
        self._check_failure("count", table)
        return len(self.tables[table])

    def insert(self, table, row):
        self._check_failure("insert", table)

        for column in self.unique.get(table, []):
            if any(existing.get(column) == row.get(column) for existing in self.tables[table]):
                raise SupabaseClientError(
                    message=(
                        f"Failed to insert into {table}: duplicate key value violates "
                        f"unique constraint \"{table}_{column}_key\""
                    ),
                    code="INSERT_FAILED",
                    pg_code="23505",
                )

        stored = {"id": str(uuid4()), **row}
        for column in _TIMESTAMP_DEFAULTS.get(table, ()):
            stored.setdefault(column, to_iso(self._clock()))
        self.tables[table].append(stored)
        return dict(stored)

    def update(self, table, filters, values):
        self._check_failure("update", table)
        updated = None
        for row in self.tables[table]:
            if _matches(row, filters):
                row.update(values)
                updated = updated or dict(row)
        return updated

    def delete(self, table, filters):
        self._check_failure("delete", table)
        removed = [dict(r) for r in self.tables[table] if _matches(r, filters)]
        self.tables[table] = [r for r in self.tables[table] if not _matches(r, filters)]
        return removed


class InMemoryBlobStore:
    """
    Bucket double.

    Filenames in `fail_put_for` make put() raise; `fail_remove` makes
    remove() raise.
    """

    def __init__(self, base_url: str = PUBLIC_BASE_URL):
        self.base_url = base_url
        self.objects: dict[str, bytes] = {}
        self.content_types: dict[str, str | None] = {}
        self.calls: list[tuple[str, Any]] = []
        self.fail_put_for: set[str] = set()
        self.fail_remove = False

    def put(self, path, content, content_type=None):
        self.calls.append(("put", path))
        if any(path.endswith(f"-{name}") for name in self.fail_put_for):
            raise StorageUploadError(path, "simulated storage outage")
        self.objects[path] = content
        self.content_types[path] = content_type
        return path

    def get(self, path):
        self.calls.append(("get", path))
        if path not in self.objects:
            raise StorageDownloadError(path, "Object not found")
        return self.objects[path]

    def list(self, prefix):
        self.calls.append(("list", prefix))
        return [{"name": p} for p in self.objects if p.startswith(prefix)]

    def remove(self, paths):
        self.calls.append(("remove", tuple(paths)))
        if self.fail_remove:
            raise StorageDeleteError(", ".join(paths), "simulated storage outage")
        for path in paths:
            self.objects.pop(path, None)

    def public_url(self, path):
        # storage3 percent-encodes the key in public URLs
        return f"{self.base_url}/{quote(path)}"
