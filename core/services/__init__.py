# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .storage_service import StorageService
from .brand_service import BrandService
from .asset_service import AssetFile, AssetService
from .record_service import ClientService, RecordService, WorkflowService
from .dashboard_service import DashboardService
from .auth_service import AuthService, auth_service

__all__ = [
    "StorageService",
    "BrandService",
    "AssetFile",
    "AssetService",
    "ClientService",
    "RecordService",
    "WorkflowService",
    "DashboardService",
    "AuthService",
    "auth_service",
]
