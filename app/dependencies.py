# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for stores and services.
# These are injected into route handlers using Depends(); tests swap the
# stores through app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends

from lib.supabase_client import SupabaseClient
from core.stores import BlobStore, RecordStore
from core.services.asset_service import AssetService
from core.services.auth_service import AuthService, auth_service
from core.services.brand_service import BrandService
from core.services.dashboard_service import DashboardService
from core.services.record_service import ClientService, WorkflowService
from core.services.storage_service import StorageService


# =============================================================================
# Stores
# =============================================================================

def get_record_store() -> RecordStore:
    """Record store backing every table (the Supabase singleton wrapper)."""
    return SupabaseClient


def get_blob_store() -> BlobStore:
    """Blob store for the brand asset bucket."""
    return StorageService


RecordStoreDep = Annotated[RecordStore, Depends(get_record_store)]
BlobStoreDep = Annotated[BlobStore, Depends(get_blob_store)]


# =============================================================================
# Services
# =============================================================================

def get_brand_service(records: RecordStoreDep) -> BrandService:
    return BrandService(records=records)


def get_asset_service(records: RecordStoreDep, blobs: BlobStoreDep) -> AssetService:
    return AssetService(records=records, blobs=blobs)


def get_client_service(records: RecordStoreDep) -> ClientService:
    return ClientService(records=records)


def get_workflow_service(records: RecordStoreDep) -> WorkflowService:
    return WorkflowService(records=records)


def get_dashboard_service(records: RecordStoreDep) -> DashboardService:
    return DashboardService(records=records)


def get_auth_service() -> AuthService:
    """The process-wide gateway, so startup listeners see every flow."""
    return auth_service


# Type aliases for dependency injection
BrandServiceDep = Annotated[BrandService, Depends(get_brand_service)]
AssetServiceDep = Annotated[AssetService, Depends(get_asset_service)]
ClientServiceDep = Annotated[ClientService, Depends(get_client_service)]
WorkflowServiceDep = Annotated[WorkflowService, Depends(get_workflow_service)]
DashboardServiceDep = Annotated[DashboardService, Depends(get_dashboard_service)]
AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
