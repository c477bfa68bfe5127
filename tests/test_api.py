# =============================================================================
# tests/test_api.py - HTTP API Tests
# =============================================================================
# End-to-end through FastAPI with in-memory stores and an overridden caller.
#
# Run with: poetry run pytest tests/test_api.py -v
# =============================================================================

import pytest
from fastapi.testclient import TestClient

from lib.supabase_client import SupabaseClientError

API = "/api/v1"


def create_brand(api, name="FastTrack Hub", description="Community platform"):
    response = api.post(f"{API}/brands", json={"name": name, "description": description})
    assert response.status_code == 201, response.text
    return response.json()


def upload(api, brand_id, *names, category="image", usage=""):
    files = [("files", (name, b"\x89PNG-data", "image/png")) for name in names]
    return api.post(
        f"{API}/brands/{brand_id}/assets",
        files=files,
        data={"category": category, "usage": usage},
    )


# =============================================================================
# Brands
# =============================================================================

class TestBrandEndpoints:

    def test_create_and_list(self, api):
        created = create_brand(api)
        create_brand(api, "Berelvant")

        assert created["slug"] == "fasttrack-hub"

        response = api.get(f"{API}/brands")
        assert response.status_code == 200
        assert [b["name"] for b in response.json()] == ["Berelvant", "FastTrack Hub"]

    def test_duplicate_slug_is_conflict(self, api):
        create_brand(api)

        response = api.post(f"{API}/brands", json={"name": "fasttrack  hub"})

        assert response.status_code == 409
        assert response.json()["code"] == "BRAND_SLUG_CONFLICT"
        assert len(api.get(f"{API}/brands").json()) == 1

    def test_blank_name_rejected(self, api):
        response = api.post(f"{API}/brands", json={"name": "   "})

        assert response.status_code == 422

    def test_rename_keeps_slug(self, api):
        brand = create_brand(api)

        response = api.patch(
            f"{API}/brands/{brand['id']}",
            json={"name": "FastTrack Academy", "description": "Renamed"},
        )

        assert response.status_code == 200
        assert response.json()["slug"] == "fasttrack-hub"
        assert response.json()["name"] == "FastTrack Academy"

    def test_patch_name_only_keeps_description(self, api):
        brand = create_brand(api, description="Community platform")

        response = api.patch(f"{API}/brands/{brand['id']}", json={"name": "FastTrack Academy"})

        assert response.status_code == 200
        assert response.json()["description"] == "Community platform"

    def test_get_missing_brand(self, api):
        response = api.get(f"{API}/brands/00000000-0000-0000-0000-000000000000")

        assert response.status_code == 404
        assert response.json()["code"] == "BRAND_NOT_FOUND"

    def test_delete_brand(self, api):
        brand = create_brand(api)

        assert api.delete(f"{API}/brands/{brand['id']}").status_code == 200
        assert api.get(f"{API}/brands").json() == []

    def test_store_failure_surfaces_message(self, api, record_store):
        record_store.fail_on[("select", "brands")] = SupabaseClientError(
            "Failed to fetch brands: permission denied for table brands",
            code="FETCH_FAILED",
        )

        response = api.get(f"{API}/brands")

        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to fetch brands: permission denied for table brands"


# =============================================================================
# Assets
# =============================================================================

class TestAssetEndpoints:

    def test_upload_multiple_files(self, api, blob_store):
        brand = create_brand(api)

        response = upload(api, brand["id"], "a.png", "b.png", usage="Social posts")

        assert response.status_code == 201, response.text
        body = response.json()
        assert body["uploaded"] == 2
        assert [a["filename"] for a in body["assets"]] == ["a.png", "b.png"]
        assert all(a["file_type"] == "image" for a in body["assets"])
        assert all(a["usage"] == "Social posts" for a in body["assets"])
        assert len(blob_store.objects) == 2

    def test_upload_to_missing_brand(self, api, blob_store):
        response = upload(api, "00000000-0000-0000-0000-000000000000", "a.png")

        assert response.status_code == 404
        assert blob_store.objects == {}

    def test_upload_unknown_category(self, api):
        brand = create_brand(api)

        response = upload(api, brand["id"], "a.mp4", category="video")

        assert response.status_code == 422

    def test_partial_batch_failure(self, api, blob_store):
        brand = create_brand(api)
        blob_store.fail_put_for.add("b.png")

        response = upload(api, brand["id"], "a.png", "b.png", "c.png")

        assert response.status_code == 500
        details = response.json()["details"]
        assert details["uploaded"] == ["a.png"]
        assert details["not_attempted"] == ["c.png"]
        assert [a["filename"] for a in api.get(f"{API}/brands/{brand['id']}/assets").json()] == ["a.png"]

    def test_list_newest_first(self, api):
        brand = create_brand(api)
        for name in ["t1.png", "t2.png", "t3.png"]:
            upload(api, brand["id"], name)

        response = api.get(f"{API}/brands/{brand['id']}/assets")

        assert [a["filename"] for a in response.json()] == ["t3.png", "t2.png", "t1.png"]

    def test_delete_asset(self, api, blob_store):
        brand = create_brand(api)
        asset = upload(api, brand["id"], "logo.png", category="logo").json()["assets"][0]

        response = api.delete(f"{API}/brands/{brand['id']}/assets/{asset['id']}")

        assert response.status_code == 200
        assert blob_store.objects == {}
        assert api.get(f"{API}/brands/{brand['id']}/assets").json() == []

    def test_delete_asset_with_space_in_name(self, api, blob_store):
        brand = create_brand(api)
        asset = upload(api, brand["id"], "My Logo.png", category="logo").json()["assets"][0]
        assert asset["file_url"].endswith("-My%20Logo.png")

        response = api.delete(f"{API}/brands/{brand['id']}/assets/{asset['id']}")

        assert response.status_code == 200
        assert blob_store.objects == {}

    def test_failed_blob_delete_keeps_row(self, api, blob_store):
        brand = create_brand(api)
        asset = upload(api, brand["id"], "logo.png", category="logo").json()["assets"][0]
        blob_store.fail_remove = True

        response = api.delete(f"{API}/brands/{brand['id']}/assets/{asset['id']}")

        assert response.status_code == 500
        assert response.json()["code"] == "STORAGE_DELETE_ERROR"
        remaining = api.get(f"{API}/brands/{brand['id']}/assets").json()
        assert [a["id"] for a in remaining] == [asset["id"]]

    def test_delete_asset_of_other_brand(self, api):
        brand = create_brand(api)
        other = create_brand(api, "CVRedi")
        asset = upload(api, brand["id"], "logo.png").json()["assets"][0]

        response = api.delete(f"{API}/brands/{other['id']}/assets/{asset['id']}")

        assert response.status_code == 404
        assert response.json()["code"] == "ASSET_NOT_FOUND"

    def test_export_download(self, api):
        brand = create_brand(api)
        upload(api, brand["id"], "a.png", "b.png")

        response = api.get(f"{API}/brands/{brand['id']}/export")

        assert response.status_code == 200
        assert response.headers["content-disposition"] == 'attachment; filename="fasttrack-hub-assets.json"'
        bundle = response.json()
        assert bundle["brand"]["slug"] == "fasttrack-hub"
        assert len(bundle["assets"]) == 2
        assert response.text.startswith("{\n  ")

    def test_export_without_assets(self, api):
        brand = create_brand(api)

        response = api.get(f"{API}/brands/{brand['id']}/export")

        assert response.json()["assets"] == []

    def test_accepted_types(self, api):
        response = api.get(f"{API}/assets/accepted-types")

        assert response.status_code == 200
        body = response.json()
        assert body["accept"].startswith("image/*")
        assert ".woff2" in body["extensions"]
        assert body["categories"] == ["logo", "image", "font", "template"]
        assert body["enforced"] is False


# =============================================================================
# Clients / Workflows / Dashboard
# =============================================================================

class TestClientEndpoints:

    def test_crud(self, api, test_user):
        created = api.post(f"{API}/clients", json={"name": "Acme", "email": "ops@acme.test"})
        assert created.status_code == 201
        client = created.json()
        assert client["status"] == "active"
        assert client["created_by"] == str(test_user.id)

        updated = api.patch(f"{API}/clients/{client['id']}", json={"status": "paused"})
        assert updated.json()["status"] == "paused"
        assert updated.json()["email"] == "ops@acme.test"

        assert api.get(f"{API}/clients/{client['id']}").json()["name"] == "Acme"
        assert api.delete(f"{API}/clients/{client['id']}").status_code == 200
        assert api.get(f"{API}/clients/{client['id']}").status_code == 404

    def test_invalid_status(self, api):
        response = api.post(f"{API}/clients", json={"name": "Acme", "status": "archived"})

        assert response.status_code == 422


class TestWorkflowEndpoints:

    def test_crud(self, api):
        created = api.post(f"{API}/workflows", json={"name": "Standard onboarding"})
        assert created.status_code == 201
        workflow = created.json()
        assert workflow["duration_days"] == 30

        updated = api.patch(f"{API}/workflows/{workflow['id']}", json={"status": "archived"})
        assert updated.json()["status"] == "archived"

        assert [w["id"] for w in api.get(f"{API}/workflows").json()] == [workflow["id"]]
        assert api.delete(f"{API}/workflows/{workflow['id']}").status_code == 200


class TestDashboardEndpoint:

    def test_stats(self, api):
        api.post(f"{API}/clients", json={"name": "Acme"})
        api.post(f"{API}/workflows", json={"name": "Standard onboarding"})

        response = api.get(f"{API}/dashboard/stats")

        assert response.json() == {"clients": 1, "workflows": 1, "tasks": 0, "team_members": 0}


# =============================================================================
# Auth / Health
# =============================================================================

class TestAuthEndpoints:

    def test_me_falls_back_to_token_claims(self, api, test_user):
        response = api.get(f"{API}/auth/me")

        assert response.status_code == 200
        assert response.json()["email"] == test_user.email

    def test_me_uses_profile_row(self, api, record_store, test_user):
        record_store.tables["users"].append(
            {"id": str(test_user.id), "email": test_user.email, "full_name": "Test User", "role": "admin"}
        )

        assert api.get(f"{API}/auth/me").json()["full_name"] == "Test User"

    def test_verify(self, api, test_user):
        assert api.get(f"{API}/auth/verify").json()["user_id"] == str(test_user.id)

    def test_login_validation(self, api):
        response = api.post(f"{API}/auth/login", json={"email": "not-an-email", "password": "x"})

        assert response.status_code == 422


class TestUnauthenticated:

    @pytest.fixture
    def anonymous(self, record_store, blob_store):
        from app.main import app
        from app.dependencies import get_blob_store, get_record_store

        app.dependency_overrides[get_record_store] = lambda: record_store
        app.dependency_overrides[get_blob_store] = lambda: blob_store
        yield TestClient(app)
        app.dependency_overrides.clear()

    @pytest.mark.parametrize(
        "method, path",
        [
            ("get", "/brands"),
            ("get", "/clients"),
            ("get", "/dashboard/stats"),
            ("get", "/assets/accepted-types"),
            ("get", "/brands/00000000-0000-0000-0000-000000000000/export"),
        ],
    )
    def test_requires_token(self, anonymous, method, path):
        response = getattr(anonymous, method)(f"{API}{path}")

        assert response.status_code in (401, 403)

    def test_bad_token(self, anonymous):
        response = anonymous.get(f"{API}/brands", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401


class TestHealth:

    def test_health(self, api):
        body = api.get(f"{API}/health").json()

        assert body["status"] == "healthy"
        assert body["environment"] == "development"

    def test_live(self, api):
        assert api.get(f"{API}/health/live").json()["status"] == "alive"

    def test_root(self, api):
        assert api.get("/").json()["health"] == "/api/v1/health"


# =============================================================================
# Route Wiring
# =============================================================================

PUBLIC_PATHS = {
    "/",
    f"{API}/auth/signup",
    f"{API}/auth/login",
    f"{API}/health",
    f"{API}/health/ready",
    f"{API}/health/live",
}


def _dependency_calls(dependant):
    for dependency in dependant.dependencies:
        yield dependency.call
        yield from _dependency_calls(dependency)


class TestRouteWiring:

    def test_every_other_route_requires_a_token(self):
        from fastapi.routing import APIRoute

        from app.auth import get_current_user
        from app.main import app

        routes = [r for r in app.routes if isinstance(r, APIRoute)]
        unguarded = [
            r.path
            for r in routes
            if r.path not in PUBLIC_PATHS
            and get_current_user not in set(_dependency_calls(r.dependant))
        ]

        assert routes
        assert unguarded == []

    def test_run_serves_on_configured_host_and_port(self, monkeypatch):
        from unittest.mock import patch

        from app import main
        from app.config import settings

        monkeypatch.setattr(settings, "API_HOST", "127.0.0.1")
        monkeypatch.setattr(settings, "API_PORT", 9123)

        with patch("uvicorn.run") as run:
            main.run()

        assert run.call_args.args == ("app.main:app",)
        assert run.call_args.kwargs["host"] == "127.0.0.1"
        assert run.call_args.kwargs["port"] == 9123
