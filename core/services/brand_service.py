# =============================================================================
# core/services/brand_service.py - Brand Directory
# =============================================================================
# Handles brand CRUD operations and slug derivation.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from typing import Any, Callable
from datetime import datetime
from uuid import UUID

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid, to_iso, utc_now
from core.models.brand import slugify
from core.stores import RecordStore
from app.exceptions import BrandNotFoundError, BrandSlugConflictError

logger = logging.getLogger(__name__)

BRANDS_TABLE = "brands"


class BrandService:
    """
    Service for brand management operations.

    Provides a clean interface between API routes and the record store.
    The slug is derived once, at creation, and never recomputed.
    """

    def __init__(
        self,
        records: RecordStore = SupabaseClient,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.records = records
        self.clock = clock

    def list_brands(self) -> list[dict[str, Any]]:
        """All brands ordered by name (ascending)."""
        return self.records.select(BRANDS_TABLE, order_by="name")

    def get_brand(self, brand_id: str | UUID) -> dict[str, Any]:
        """
        Get a brand by ID.

        Raises:
            BrandNotFoundError: If the brand doesn't exist
        """
        brand_id_str = normalize_uuid(brand_id)
        brand = self.records.fetch_one(BRANDS_TABLE, {"id": brand_id_str})
        if not brand:
            raise BrandNotFoundError(brand_id_str)
        return brand

    def get_brand_by_slug(self, slug: str) -> dict[str, Any]:
        """
        Get a brand by its slug.

        Raises:
            BrandNotFoundError: If no brand has this slug
        """
        brand = self.records.fetch_one(BRANDS_TABLE, {"slug": slug})
        if not brand:
            raise BrandNotFoundError(slug)
        return brand

    def create_brand(self, name: str, description: str = "") -> dict[str, Any]:
        """
        Create a brand.

        Args:
            name: Display name (slug is derived from it)
            description: Free-text description

        Returns:
            Created brand row

        Raises:
            BrandSlugConflictError: If another brand already has the slug
            SupabaseClientError: For any other store failure
        """
        slug = slugify(name)

        try:
            brand = self.records.insert(
                BRANDS_TABLE,
                {"name": name, "slug": slug, "description": description},
            )
        except SupabaseClientError as e:
            if e.is_unique_violation:
                logger.info(f"Brand slug already taken: {slug}")
                raise BrandSlugConflictError(slug, e.message) from e
            logger.error(f"Failed to create brand {name!r}: {e}")
            raise

        logger.info(f"Created brand: {brand.get('id')} ({slug})")
        return brand

    def update_brand(
        self,
        brand_id: str | UUID,
        name: str,
        description: str | None = None,
    ) -> dict[str, Any]:
        """
        Rename / re-describe a brand and refresh updated_at.

        The slug is left as it was at creation. A None description keeps
        the stored one.

        Raises:
            BrandNotFoundError: If the brand doesn't exist
        """
        brand_id_str = normalize_uuid(brand_id)

        values = {"name": name, "updated_at": to_iso(self.clock())}
        if description is not None:
            values["description"] = description

        brand = self.records.update(BRANDS_TABLE, {"id": brand_id_str}, values)
        if not brand:
            raise BrandNotFoundError(brand_id_str)

        logger.info(f"Updated brand: {brand_id_str}")
        return brand

    def delete_brand(self, brand_id: str | UUID) -> None:
        """
        Delete a brand row.

        Assets referencing the brand are left to the store's cascade rules.

        Raises:
            BrandNotFoundError: If the brand doesn't exist
        """
        brand_id_str = normalize_uuid(brand_id)

        deleted = self.records.delete(BRANDS_TABLE, {"id": brand_id_str})
        if not deleted:
            raise BrandNotFoundError(brand_id_str)

        logger.info(f"Deleted brand: {brand_id_str}")
