# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for the API schemas and slug derivation:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Partial updates only carry the fields that were sent
#
# Run with: poetry run pytest tests/test_models.py -v
# =============================================================================

import pytest
from pydantic import ValidationError

from core.models import (
    AssetCategory,
    AssetResponse,
    BrandCreate,
    BrandResponse,
    BrandUpdate,
    ClientCreate,
    ClientStatus,
    ClientUpdate,
    WorkflowCreate,
    WorkflowStatus,
    WorkflowUpdate,
    slugify,
)


# =============================================================================
# Slug Tests
# =============================================================================

class TestSlugify:
    """Tests for slug derivation from brand names."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Berelvant", "berelvant"),
            ("FastTrack Hub", "fasttrack-hub"),
            ("FastTrack   Hub", "fasttrack-hub"),
            ("Fast\tTrack\nHub", "fast-track-hub"),
            ("  CVRedi  ", "cvredi"),
            ("ACME Co. 2024", "acme-co.-2024"),
        ],
    )
    def test_slug_values(self, name, expected):
        assert slugify(name) == expected

    @pytest.mark.parametrize(
        "name",
        ["Berelvant", "  Mixed CASE  name ", "tabs\t\tand\nnewlines", "Ünïcödé Brand"],
    )
    def test_slug_is_lowercase_without_whitespace(self, name):
        slug = slugify(name)

        assert slug == slug.lower()
        assert not any(ch.isspace() for ch in slug)
        assert "--" not in slug

    def test_slug_is_stable(self):
        """Same input gives the same slug, and slugs are fixed points."""
        name = "FastTrack  Hub"

        assert slugify(name) == slugify(name)
        assert slugify(slugify(name)) == slugify(name)


# =============================================================================
# Brand Model Tests
# =============================================================================

class TestBrandModels:

    def test_brand_create_defaults_description(self):
        brand = BrandCreate(name="CVRedi")
        assert brand.description == ""

    @pytest.mark.parametrize("name", ["", "   "])
    def test_brand_create_rejects_blank_name(self, name):
        with pytest.raises(ValidationError):
            BrandCreate(name=name)

    def test_brand_update_only_dumps_sent_fields(self):
        update = BrandUpdate(name="FastTrack Academy")

        assert update.description is None
        assert update.model_dump(exclude_unset=True) == {"name": "FastTrack Academy"}

    def test_brand_response_parses_store_row(self):
        row = {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "name": "Berelvant",
            "slug": "berelvant",
            "description": None,
            "created_at": "2024-01-15T10:30:00+00:00",
            "updated_at": "2024-01-15T10:30:00+00:00",
        }

        brand = BrandResponse(**row)

        assert str(brand.id) == row["id"]
        assert brand.created_at.year == 2024


# =============================================================================
# Asset Model Tests
# =============================================================================

class TestAssetModels:

    def test_categories_are_closed(self):
        assert {c.value for c in AssetCategory} == {"logo", "image", "font", "template"}

        with pytest.raises(ValueError):
            AssetCategory("video")

    def test_asset_response_rejects_unknown_category(self):
        with pytest.raises(ValidationError):
            AssetResponse(
                id="7c1e8400-e29b-41d4-a716-446655440000",
                brand_id="550e8400-e29b-41d4-a716-446655440000",
                filename="clip.mp4",
                file_type="video",
                file_url="https://x/brand-assets/a/b/1-clip.mp4",
            )


# =============================================================================
# Client / Workflow Model Tests
# =============================================================================

class TestClientModels:

    def test_client_status_defaults_to_active(self):
        client = ClientCreate(name="Acme")
        assert client.status == ClientStatus.ACTIVE

    def test_client_rejects_unknown_status(self):
        with pytest.raises(ValidationError):
            ClientCreate(name="Acme", status="archived")

    def test_client_update_only_dumps_sent_fields(self):
        update = ClientUpdate(status="completed")

        assert update.model_dump(mode="json", exclude_unset=True) == {"status": "completed"}


class TestWorkflowModels:

    def test_workflow_defaults(self):
        workflow = WorkflowCreate(name="Standard onboarding")

        assert workflow.duration_days == 30
        assert workflow.status == WorkflowStatus.ACTIVE

    def test_workflow_rejects_negative_duration(self):
        with pytest.raises(ValidationError):
            WorkflowCreate(name="Broken", duration_days=-1)

    def test_any_status_can_be_requested(self):
        """No transition rules: archived -> draft is a plain update."""
        update = WorkflowUpdate(status="draft")
        assert update.status == WorkflowStatus.DRAFT
