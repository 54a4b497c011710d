"""Tests for site settings, public pages and the CLI bootstrap."""

from conftest import image_upload
from sqlalchemy import insert

from nexus_cms.cli import seed_database
from nexus_cms.domain.permissions import PERMISSIONS
from nexus_cms.extensions import db
from nexus_cms.models.setting import Setting
from nexus_cms.models.user import Permission, User

SETTINGS_FORM = {
    "our_mission": "Build well",
    "our_vision": "Everywhere",
    "portfolio": "<p>Bridges</p>",
    "years": "12",
    "projects": "340",
    "clients": "90",
    "engineers": "45",
}


class TestSettings:
    def test_first_read_creates_the_singleton(self, client, admin_headers):
        response = client.get("/api/admin/settings", headers=admin_headers)
        assert response.status_code == 200
        assert response.get_json()["data"]["years"] == 0
        assert Setting.query.count() == 1

    def test_update_requires_every_counter(self, client, admin_headers):
        form = dict(SETTINGS_FORM)
        form.pop("engineers")
        response = client.put("/api/admin/settings", json=form, headers=admin_headers)
        assert response.status_code == 422

    def test_update_with_image(self, client, admin_headers):
        response = client.post(
            "/api/admin/settings",
            data={**SETTINGS_FORM, "image": image_upload()},
            headers=admin_headers,
            content_type="multipart/form-data",
        )

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["projects"] == 340
        assert data["image"].startswith("http://testserver/storage/settings/")
        assert Setting.query.count() == 1

    def test_concurrent_first_read_reuses_the_existing_row(self, app, monkeypatch):
        # Row inserted by another request after this one looked it up
        db.session.execute(insert(Setting.__table__).values(id=1, years=7))
        db.session.commit()
        lookups = []
        original_get = db.session.get

        def stale_get(model, ident):
            lookups.append(ident)
            return None if len(lookups) == 1 else original_get(model, ident)

        monkeypatch.setattr(db.session, "get", stale_get)

        setting = Setting.current()

        assert setting.years == 7
        assert len(lookups) == 2
        assert Setting.query.count() == 1

    def test_about_is_public(self, client):
        response = client.get("/api/public/about")
        assert response.status_code == 200
        assert "our_mission" in response.get_json()["data"]


class TestPublicPages:
    def test_home_lists_active_testimonials(self, client, make_feedback):
        make_feedback("Ada")
        make_feedback("Bola", is_active=False)

        response = client.get("/api/public/home")

        data = response.get_json()["data"]
        assert [t["name"] for t in data["testimonials"]] == ["Ada"]
        assert data["services"] == [] and data["projects"] == []

    def test_health(self, client):
        assert client.get("/api/health").get_json()["status"] == "ok"

    def test_unknown_route_uses_error_envelope(self, client):
        response = client.get("/api/nowhere")
        assert response.status_code == 404
        assert response.get_json() == {"success": False, "message": "Resource not found"}

    def test_openapi_document_is_served(self, client):
        response = client.get("/openapi/cms.yaml")
        assert response.status_code == 200
        assert b"openapi: 3.0.3" in response.data


class TestSeed:
    def test_seed_is_idempotent(self, app):
        first = seed_database(super_admin_password="bootstrap-pass")
        second = seed_database()

        assert first.id == second.id
        assert second.is_super_admin
        assert Permission.query.count() == len(PERMISSIONS) + 1
        assert User.query.count() == 1

    def test_demo_admin_is_view_only(self, app):
        seed_database(super_admin_password="bootstrap-pass", demo_password="demo-pass")

        demo = User.query.filter_by(email="demo@nexusengineering.com").one()
        assert demo.check_password("demo-pass")
        assert all(name.startswith("view_") for name in demo.permission_names())
        assert not demo.is_super_admin
