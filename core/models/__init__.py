# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - brand.py: Brand CRUD schemas and slug derivation
# - asset.py: Brand asset schemas and the asset category enum
# - client.py: Client CRUD schemas
# - workflow.py: Workflow CRUD schemas
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# Brand Models
# -----------------------------------------------------------------------------
from .brand import (
    BrandCreate,
    BrandResponse,
    BrandUpdate,
    slugify,
)

# -----------------------------------------------------------------------------
# Asset Models
# -----------------------------------------------------------------------------
from .asset import (
    ACCEPTED_UPLOAD_TYPES,
    AcceptedTypesResponse,
    AssetBatchResponse,
    AssetCategory,
    AssetResponse,
)

# -----------------------------------------------------------------------------
# Client / Workflow Models
# -----------------------------------------------------------------------------
from .client import (
    ClientCreate,
    ClientResponse,
    ClientStatus,
    ClientUpdate,
)
from .workflow import (
    WorkflowCreate,
    WorkflowResponse,
    WorkflowStatus,
    WorkflowUpdate,
)

__all__ = [
    # Brand
    "BrandCreate",
    "BrandResponse",
    "BrandUpdate",
    "slugify",
    # Asset
    "ACCEPTED_UPLOAD_TYPES",
    "AcceptedTypesResponse",
    "AssetBatchResponse",
    "AssetCategory",
    "AssetResponse",
    # Client
    "ClientCreate",
    "ClientResponse",
    "ClientStatus",
    "ClientUpdate",
    # Workflow
    "WorkflowCreate",
    "WorkflowResponse",
    "WorkflowStatus",
    "WorkflowUpdate",
]
