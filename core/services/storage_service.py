# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Handles object operations against the brand asset bucket.
# The class satisfies core.stores.BlobStore.
# =============================================================================

from __future__ import annotations

import logging
import mimetypes
from typing import Any

from lib.supabase_client import SupabaseClient
from app.config import settings
from app.exceptions import StorageUploadError, StorageDeleteError, StorageDownloadError

logger = logging.getLogger(__name__)


def guess_content_type(path: str) -> str:
    """Content type from the file extension, octet-stream when unknown."""
    content_type, _ = mimetypes.guess_type(path)
    return content_type or "application/octet-stream"


class StorageService:
    """
    Service for Supabase Storage operations.

    Every call is attempted once; failures are raised to the caller.
    """

    @staticmethod
    def _bucket() -> Any:
        return SupabaseClient.get_client().storage.from_(settings.ASSET_BUCKET)

    @staticmethod
    def put(path: str, content: bytes, content_type: str | None = None) -> str:
        """
        Upload raw file content to storage.

        Existing objects are not overwritten; keys carry a millisecond
        timestamp so collisions only happen on a genuine duplicate.

        Args:
            path: Object key inside the bucket
            content: File bytes
            content_type: MIME type (guessed from the key when omitted)

        Returns:
            Storage path

        Raises:
            StorageUploadError: If upload fails
        """
        try:
            StorageService._bucket().upload(
                path=path,
                file=content,
                file_options={"content-type": content_type or guess_content_type(path)},
            )

            logger.info(f"Uploaded file to storage: {path} ({len(content)} bytes)")
            return path

        except Exception as e:
            logger.error(f"Storage upload failed for {path}: {e}")
            raise StorageUploadError(path, str(e))

    @staticmethod
    def get(path: str) -> bytes:
        """
        Download raw file content from storage.

        Raises:
            StorageDownloadError: If download fails
        """
        try:
            content = StorageService._bucket().download(path)
            logger.info(f"Downloaded file from storage: {path}")
            return content

        except Exception as e:
            logger.error(f"Storage download failed for {path}: {e}")
            raise StorageDownloadError(path, str(e))

    @staticmethod
    def list(prefix: str) -> list[dict]:
        """
        List objects under a key prefix (e.g. "<brand_id>/logo").

        Returns an empty list when the prefix holds nothing or can't be read.
        """
        try:
            response = StorageService._bucket().list(prefix)
            return response or []

        except Exception as e:
            logger.error(f"Failed to list files under {prefix}: {e}")
            return []

    @staticmethod
    def remove(paths: list[str]) -> None:
        """
        Delete objects from storage.

        Raises:
            StorageDeleteError: If removal fails
        """
        try:
            StorageService._bucket().remove(paths)
            logger.info(f"Deleted from storage: {', '.join(paths)}")

        except Exception as e:
            logger.error(f"Failed to delete {paths}: {e}")
            raise StorageDeleteError(", ".join(paths), str(e))

    @staticmethod
    def public_url(path: str) -> str:
        """
        Get the public URL for a storage object.

        The bucket is public, so the URL is derived without a network call.
        """
        return StorageService._bucket().get_public_url(path)
