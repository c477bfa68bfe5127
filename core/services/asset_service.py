# =============================================================================
# core/services/asset_service.py - Brand Asset Repository
# =============================================================================
# Orchestrates the two stores behind every brand asset:
#
#   upload:  derive key -> write blob -> public URL -> insert metadata row
#   delete:  key from stored URL -> remove blob -> delete metadata row
#   export:  one row of the brands_with_assets view, returned verbatim
#
# Every step is attempted once, in order. A failed step aborts the rest and
# nothing already done is undone:
# - a blob written before a failed insert stays in the bucket (logged)
# - a failed blob removal leaves the metadata row in place
# - a failed file in a batch leaves earlier files uploaded, later ones untried
# =============================================================================

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import PurePosixPath
from typing import Any, Callable
from urllib.parse import unquote, urlsplit
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import epoch_millis, normalize_uuid, to_iso, utc_now
from core.models.asset import AssetCategory
from core.services.storage_service import StorageService
from core.stores import BlobStore, RecordStore
from app.config import settings
from app.exceptions import (
    AssetNotFoundError,
    AssetPathError,
    BatchUploadError,
    BrandNotFoundError,
    FileTooLargeError,
    InvalidFileTypeError,
    OnboardingException,
)

logger = logging.getLogger(__name__)

ASSETS_TABLE = "assets"
EXPORT_VIEW = "brands_with_assets"


@dataclass
class AssetFile:
    """One file handed to the repository for upload."""

    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> str:
        return PurePosixPath(self.filename).suffix.lower()


class AssetService:
    """
    Service for brand asset storage and metadata.

    Example:
        service = AssetService()
        rows = service.upload_assets(
            brand_id,
            [AssetFile("a.png", b"..."), AssetFile("b.png", b"...")],
            category=AssetCategory.IMAGE,
        )
    """

    def __init__(
        self,
        records: RecordStore = SupabaseClient,
        blobs: BlobStore = StorageService,
        clock: Callable[[], datetime] = utc_now,
        bucket_marker: str | None = None,
        enforce_filter: bool | None = None,
    ):
        self.records = records
        self.blobs = blobs
        self.clock = clock
        self.bucket_marker = bucket_marker or settings.bucket_url_marker
        self.enforce_filter = (
            settings.ENFORCE_UPLOAD_FILTER if enforce_filter is None else enforce_filter
        )

    # -------------------------------------------------------------------------
    # Storage keys
    # -------------------------------------------------------------------------

    @staticmethod
    def build_storage_path(
        brand_id: str | UUID,
        category: AssetCategory | str,
        filename: str,
        uploaded_at: datetime,
    ) -> str:
        """
        Object key for an upload: <brand_id>/<category>/<epoch_ms>-<filename>.

        The millisecond timestamp keeps keys unique without coordination.
        """
        category_value = AssetCategory(category).value
        return f"{normalize_uuid(brand_id)}/{category_value}/{epoch_millis(uploaded_at)}-{filename}"

    def storage_path_from_url(self, stored_url: str) -> str:
        """
        Recover the object key from a stored public URL.

        Takes everything after the first bucket marker ("/brand-assets/") in the
        URL path. Public URLs carry the key percent-encoded (and may end in a
        query string), so the remainder is decoded back to the stored key.

        Raises:
            AssetPathError: If the URL has no marker or nothing after it
        """
        _, found, path = urlsplit(stored_url).path.partition(self.bucket_marker)
        if not found or not path:
            raise AssetPathError(stored_url, self.bucket_marker)
        return unquote(path)

    # -------------------------------------------------------------------------
    # Upload
    # -------------------------------------------------------------------------

    def check_upload(self, file: AssetFile) -> None:
        """
        Apply the allow-list and size limit when server-side enforcement is on.

        Raises:
            InvalidFileTypeError: Extension not in the allow-list
            FileTooLargeError: File over MAX_UPLOAD_SIZE_MB
        """
        if not self.enforce_filter:
            return

        allowed = settings.allowed_extensions_list
        if file.extension not in allowed:
            raise InvalidFileTypeError(file.filename, allowed)

        if file.size > settings.max_upload_size_bytes:
            raise FileTooLargeError(
                file.filename,
                file.size / (1024 * 1024),
                settings.MAX_UPLOAD_SIZE_MB,
            )

    def upload_asset(
        self,
        brand_id: str | UUID,
        file: AssetFile,
        category: AssetCategory | str,
        usage: str = "",
    ) -> dict[str, Any]:
        """
        Upload one file and record it.

        Returns:
            Created asset row

        Raises:
            StorageUploadError: Blob write failed (no row inserted)
            SupabaseClientError: Metadata insert failed (blob left in bucket)
        """
        brand_id_str = normalize_uuid(brand_id)
        category_value = AssetCategory(category).value
        self.check_upload(file)

        uploaded_at = self.clock()
        path = self.build_storage_path(brand_id_str, category_value, file.filename, uploaded_at)

        self.blobs.put(path, file.content, file.content_type)
        file_url = self.blobs.public_url(path)

        try:
            asset = self.records.insert(
                ASSETS_TABLE,
                {
                    "brand_id": brand_id_str,
                    "filename": file.filename,
                    "file_type": category_value,
                    "file_url": file_url,
                    "file_size": file.size,
                    "usage": usage,
                    "uploaded_at": to_iso(uploaded_at),
                },
            )
        except SupabaseClientError:
            logger.warning(f"Asset row insert failed; blob left orphaned at {path}")
            raise

        logger.info(f"Uploaded asset {asset.get('id')} for brand {brand_id_str}: {path}")
        return asset

    def upload_assets(
        self,
        brand_id: str | UUID,
        files: list[AssetFile],
        category: AssetCategory | str,
        usage: str = "",
    ) -> list[dict[str, Any]]:
        """
        Upload several files one at a time, in list order.

        Stops at the first failure.

        Returns:
            Created asset rows in upload order

        Raises:
            BatchUploadError: Carries the rows already created and the
                filenames never attempted
        """
        if self.enforce_filter:
            for file in files:
                self.check_upload(file)

        uploaded: list[dict[str, Any]] = []

        for index, file in enumerate(files):
            try:
                uploaded.append(self.upload_asset(brand_id, file, category, usage))
            except (OnboardingException, SupabaseClientError) as e:
                remaining = [f.filename for f in files[index + 1:]]
                logger.error(
                    f"Batch upload stopped at {file.filename} "
                    f"({len(uploaded)} uploaded, {len(remaining)} not attempted): {e}"
                )
                raise BatchUploadError(file.filename, e, uploaded, remaining) from e

        return uploaded

    # -------------------------------------------------------------------------
    # Read
    # -------------------------------------------------------------------------

    def list_assets(self, brand_id: str | UUID) -> list[dict[str, Any]]:
        """All assets of a brand, newest upload first."""
        return self.records.select(
            ASSETS_TABLE,
            {"brand_id": normalize_uuid(brand_id)},
            order_by="uploaded_at",
            desc=True,
        )

    def get_asset(
        self,
        asset_id: str | UUID,
        brand_id: str | UUID | None = None,
    ) -> dict[str, Any]:
        """
        Get one asset, optionally requiring it to belong to a brand.

        Raises:
            AssetNotFoundError: If no such asset (for that brand)
        """
        asset_id_str = normalize_uuid(asset_id)
        filters = {"id": asset_id_str}
        if brand_id is not None:
            filters["brand_id"] = normalize_uuid(brand_id)

        asset = self.records.fetch_one(ASSETS_TABLE, filters)
        if not asset:
            raise AssetNotFoundError(asset_id_str)
        return asset

    # -------------------------------------------------------------------------
    # Delete
    # -------------------------------------------------------------------------

    def delete_asset(self, asset_id: str | UUID, stored_url: str) -> None:
        """
        Remove an asset's blob, then its row.

        Raises:
            AssetPathError: URL doesn't point into the bucket (nothing removed)
            StorageDeleteError: Blob removal failed (row kept)
            SupabaseClientError: Row delete failed (blob already gone)
        """
        asset_id_str = normalize_uuid(asset_id)
        path = self.storage_path_from_url(stored_url)

        self.blobs.remove([path])
        self.records.delete(ASSETS_TABLE, {"id": asset_id_str})

        logger.info(f"Deleted asset {asset_id_str} ({path})")

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    def export_bundle(self, brand_id: str | UUID) -> Any:
        """
        The brand's assets as the brands_with_assets view nests them.

        A brand without assets yields an empty "assets" list.

        Raises:
            BrandNotFoundError: If the view has no row for the brand
        """
        brand_id_str = normalize_uuid(brand_id)

        row = self.records.fetch_one(EXPORT_VIEW, {"id": brand_id_str})
        if not row:
            raise BrandNotFoundError(brand_id_str)

        bundle = row.get("assets_json")
        if bundle is None:
            return {"assets": []}
        if isinstance(bundle, dict) and bundle.get("assets") is None:
            return {**bundle, "assets": []}
        return bundle
