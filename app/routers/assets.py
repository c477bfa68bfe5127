# =============================================================================
# app/routers/assets.py - Brand Asset Endpoints
# =============================================================================
# Upload (multi-file), list, delete and JSON export of a brand's assets.
# =============================================================================

import json
import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Path, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response

from app.auth import get_current_user, AuthUser
from app.config import settings
from app.dependencies import AssetServiceDep, BrandServiceDep
from core.models.asset import (
    ACCEPTED_UPLOAD_TYPES,
    AcceptedTypesResponse,
    AssetBatchResponse,
    AssetCategory,
    AssetResponse,
)
from core.services.asset_service import AssetFile

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Upload
# =============================================================================

@router.post(
    "/brands/{brand_id}/assets",
    response_model=AssetBatchResponse,
    status_code=status.HTTP_201_CREATED,
)
async def upload_assets(
    brand_id: Annotated[UUID, Path(description="Brand UUID")],
    files: Annotated[list[UploadFile], File(description="One or more asset files")],
    category: Annotated[AssetCategory, Form(description="logo, image, font or template")],
    brands: BrandServiceDep,
    assets: AssetServiceDep,
    usage: Annotated[str, Form(description="Usage note applied to every file")] = "",
    user: AuthUser = Depends(get_current_user),
):
    """
    Upload files to a brand, one at a time in the order given.

    If a file fails, the files before it stay uploaded and the rest are not
    attempted; the error lists both.
    """
    await run_in_threadpool(brands.get_brand, brand_id)

    batch = []
    for upload in files:
        batch.append(
            AssetFile(
                filename=upload.filename or "upload",
                content=await upload.read(),
                content_type=upload.content_type,
            )
        )

    logger.info(f"Uploading {len(batch)} {category.value} file(s) to brand {brand_id}")
    rows = await run_in_threadpool(assets.upload_assets, brand_id, batch, category, usage)

    return AssetBatchResponse(brand_id=brand_id, uploaded=len(rows), assets=rows)


# =============================================================================
# List / Delete
# =============================================================================

@router.get("/brands/{brand_id}/assets", response_model=list[AssetResponse])
def list_assets(
    brand_id: Annotated[UUID, Path(description="Brand UUID")],
    brands: BrandServiceDep,
    assets: AssetServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """List a brand's assets, newest upload first."""
    brands.get_brand(brand_id)
    return assets.list_assets(brand_id)


@router.delete("/brands/{brand_id}/assets/{asset_id}")
def delete_asset(
    brand_id: Annotated[UUID, Path(description="Brand UUID")],
    asset_id: Annotated[UUID, Path(description="Asset UUID")],
    assets: AssetServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Delete an asset's file and its record.

    If the file can't be removed from storage the record is kept.
    """
    asset = assets.get_asset(asset_id, brand_id=brand_id)
    assets.delete_asset(asset["id"], asset["file_url"])

    return {
        "asset_id": str(asset_id),
        "message": "Asset deleted successfully",
    }


# =============================================================================
# Export
# =============================================================================

@router.get("/brands/{brand_id}/export")
def export_assets(
    brand_id: Annotated[UUID, Path(description="Brand UUID")],
    brands: BrandServiceDep,
    assets: AssetServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Download the brand's assets as <slug>-assets.json.

    Content is the brands_with_assets view's assets_json, pretty-printed.
    """
    brand = brands.get_brand(brand_id)
    bundle = assets.export_bundle(brand_id)

    filename = f"{brand['slug']}-assets.json"
    return Response(
        content=json.dumps(bundle, indent=2, default=str),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# =============================================================================
# Upload filter
# =============================================================================

@router.get("/assets/accepted-types", response_model=AcceptedTypesResponse)
async def accepted_types(user: AuthUser = Depends(get_current_user)):
    """File-picker filter for the upload zone."""
    return AcceptedTypesResponse(
        accept=ACCEPTED_UPLOAD_TYPES,
        extensions=settings.allowed_extensions_list,
        categories=list(AssetCategory),
        enforced=settings.ENFORCE_UPLOAD_FILTER,
        max_upload_size_mb=settings.MAX_UPLOAD_SIZE_MB,
    )
