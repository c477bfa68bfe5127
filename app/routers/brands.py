# =============================================================================
# app/routers/brands.py - Brand CRUD Endpoints
# =============================================================================
# Brand directory: list, create (slug derived from the name), rename,
# delete. All endpoints require authentication.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status

from app.auth import get_current_user, AuthUser
from app.dependencies import BrandServiceDep
from core.models.brand import BrandCreate, BrandResponse, BrandUpdate

router = APIRouter()


@router.get("", response_model=list[BrandResponse])
def list_brands(
    brands: BrandServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """List all brands, ordered by name."""
    return brands.list_brands()


@router.post("", response_model=BrandResponse, status_code=status.HTTP_201_CREATED)
def create_brand(
    request: BrandCreate,
    brands: BrandServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a brand.

    The slug is the lowercased name with whitespace runs turned into hyphens.
    Returns 409 if another brand already has that slug.
    """
    return brands.create_brand(request.name, request.description)


@router.get("/{brand_id}", response_model=BrandResponse)
def get_brand(
    brand_id: Annotated[UUID, Path(description="Brand UUID")],
    brands: BrandServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Get one brand."""
    return brands.get_brand(brand_id)


@router.patch("/{brand_id}", response_model=BrandResponse)
def update_brand(
    brand_id: Annotated[UUID, Path(description="Brand UUID")],
    request: BrandUpdate,
    brands: BrandServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Rename or re-describe a brand.

    The slug keeps the value it was given at creation.
    """
    return brands.update_brand(brand_id, request.name, request.description)


@router.delete("/{brand_id}")
def delete_brand(
    brand_id: Annotated[UUID, Path(description="Brand UUID")],
    brands: BrandServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """Delete a brand. Its assets are left to the database's cascade rules."""
    brands.delete_brand(brand_id)

    return {
        "brand_id": str(brand_id),
        "message": "Brand deleted successfully",
    }
