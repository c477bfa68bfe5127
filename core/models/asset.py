# =============================================================================
# core/models/asset.py - Brand Asset Schemas
# =============================================================================
# These models define the API contract for brand asset operations:
# - AssetCategory: Closed set of asset kinds (logo, image, font, template)
# - AssetResponse: An asset row as returned to clients
# - AssetBatchResponse: Result of a multi-file upload
# - AcceptedTypesResponse: File-picker filter for the upload zone
#
# Asset bytes live in the storage bucket; the row carries the public URL.
# =============================================================================

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel, Field


class AssetCategory(str, Enum):
    """
    Kind of brand asset.

    Also the second segment of the storage key:
    <brand_id>/<category>/<epoch_ms>-<filename>
    """
    LOGO = "logo"
    IMAGE = "image"
    FONT = "font"
    TEMPLATE = "template"


# accept= value offered to the browser file picker
ACCEPTED_UPLOAD_TYPES = "image/*,.png,.jpg,.jpeg,.svg,.gif,.webp,.ttf,.otf,.woff,.woff2"


class AssetResponse(BaseModel):
    """
    Schema for returning asset data to clients.

    Example:
        {
            "id": "7c1e...",
            "brand_id": "550e...",
            "filename": "logo-dark.svg",
            "file_type": "logo",
            "file_url": "https://x.supabase.co/storage/v1/object/public/brand-assets/550e.../logo/1718000000000-logo-dark.svg",
            "file_size": 5321,
            "usage": "Dark backgrounds only",
            "uploaded_at": "2024-06-10T06:13:20Z"
        }
    """

    id: UUID
    brand_id: UUID
    filename: str
    file_type: AssetCategory
    file_url: str
    file_size: int = Field(default=0, ge=0, description="Size in bytes")
    usage: str | None = Field(default=None, description="Free-text usage note")
    uploaded_at: datetime | None = None

    model_config = {"from_attributes": True}


class AssetBatchResponse(BaseModel):
    """Result of POST /brands/{id}/assets; assets are in upload order."""

    brand_id: UUID
    uploaded: int = Field(..., ge=0)
    assets: list[AssetResponse] = Field(default_factory=list)


class AcceptedTypesResponse(BaseModel):
    """Upload filter for the UI and whether the server enforces it."""

    accept: str
    extensions: list[str]
    categories: list[AssetCategory]
    enforced: bool
    max_upload_size_mb: int
