# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Onboarding Platform API:
# - test_models.py: Unit tests for Pydantic model validation and slugs
# - test_brand_service.py / test_asset_service.py: Brand asset repository
# - test_record_service.py: Clients, workflows and dashboard counters
# - test_auth_service.py: Identity gateway and token verification
# - test_supabase_client.py: Supabase wrapper query chains and errors
# - test_api.py: Integration tests for API endpoints
#
# Run tests with: poetry run pytest
# =============================================================================
