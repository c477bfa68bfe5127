# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the brand/asset/client/workflow logic:
# - models/: Pydantic schemas for data validation
# - stores.py: RecordStore / BlobStore interfaces the services depend on
# - services/: Brand directory, asset repository, CRUD and auth services
#
# Services receive their stores through the constructor; the defaults are
# the Supabase-backed implementations.
# =============================================================================
