# =============================================================================
# core/models/brand.py - Brand Schemas
# =============================================================================
# These models define the API contract for brand operations:
# - BrandCreate / BrandUpdate: Input for creating and editing a brand
# - BrandResponse: A brand row as returned to clients
# - slugify(): URL-safe identifier derived from a brand's display name
#
# A brand is the tenant scope that owns a set of digital assets.
# =============================================================================

import re
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

_WHITESPACE_RUN = re.compile(r"\s+")


def slugify(name: str) -> str:
    """
    Derive a brand slug from its display name.

    Lowercases the name and replaces every run of whitespace with a single
    hyphen. Leading/trailing whitespace is dropped first. Applying it to its
    own output returns the same slug.

    Example:
        slugify("FastTrack  Hub") -> "fasttrack-hub"
    """
    return _WHITESPACE_RUN.sub("-", name.strip().lower())


class BrandCreate(BaseModel):
    """
    Schema for creating a brand.

    Example:
        {"name": "FastTrack Hub", "description": "Community and mentorship platform"}
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=120,
        pattern=r"\S",
        description="Display name; the slug is derived from it once"
    )

    description: str = Field(
        default="",
        max_length=2000,
        description="Free-text description of the brand"
    )


class BrandUpdate(BaseModel):
    """
    Schema for editing a brand.

    The slug is fixed at creation and is not recomputed on rename.
    An omitted description leaves the stored one as it is.
    """

    name: str = Field(..., min_length=1, max_length=120, pattern=r"\S")
    description: str | None = Field(default=None, max_length=2000)


class BrandResponse(BaseModel):
    """
    Schema for returning brand data to clients.

    Returned by GET /brands, POST /brands and GET/PATCH /brands/{id}.
    """

    id: UUID = Field(..., description="Unique brand identifier")
    name: str = Field(..., description="Display name")
    slug: str = Field(..., description="URL-safe identifier (immutable)")
    description: str | None = Field(default=None)
    created_at: datetime | None = Field(default=None)
    updated_at: datetime | None = Field(default=None)

    model_config = {"from_attributes": True}
