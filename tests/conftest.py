# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory record/blob stores and services wired to them
# - A TestClient with stores and auth overridden
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SUPABASE_JWT_SECRET", "test-jwt-secret-at-least-32-characters")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from uuid import UUID

import pytest
from fastapi.testclient import TestClient

from tests.fakes import FakeClock, InMemoryBlobStore, InMemoryRecordStore

TEST_USER_ID = UUID("11111111-2222-3333-4444-555555555555")


# =============================================================================
# Stores & Services
# =============================================================================

@pytest.fixture
def record_store():
    """Empty in-memory record store with the brands.slug unique constraint."""
    return InMemoryRecordStore()


@pytest.fixture
def blob_store():
    """Empty in-memory bucket."""
    return InMemoryBlobStore()


@pytest.fixture
def clock():
    """Clock starting 2024-06-10T12:00:00Z, one second per reading."""
    return FakeClock()


@pytest.fixture
def brand_service(record_store, clock):
    from core.services.brand_service import BrandService
    return BrandService(records=record_store, clock=clock)


@pytest.fixture
def asset_service(record_store, blob_store, clock):
    from core.services.asset_service import AssetService
    return AssetService(records=record_store, blobs=blob_store, clock=clock, enforce_filter=False)


@pytest.fixture
def brand(brand_service):
    """A stored brand to hang assets on."""
    return brand_service.create_brand("FastTrack Hub", "Community and mentorship platform")


# =============================================================================
# API
# =============================================================================

@pytest.fixture
def test_user():
    from app.auth.models import AuthUser
    return AuthUser(id=TEST_USER_ID, email="tester@example.com", token="test-access-token")


@pytest.fixture
def api(record_store, blob_store, test_user):
    """TestClient whose stores are in-memory and whose caller is authenticated."""
    from app.main import app
    from app.auth import get_current_user
    from app.dependencies import get_blob_store, get_record_store

    app.dependency_overrides[get_record_store] = lambda: record_store
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    app.dependency_overrides[get_current_user] = lambda: test_user

    yield TestClient(app)

    app.dependency_overrides.clear()
