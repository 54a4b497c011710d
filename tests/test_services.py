"""Tests for services: cover photos, sections and discipline links."""

import io
import os

from conftest import image_upload

from nexus_cms.extensions import db
from nexus_cms.models.service import Service, ServiceSection


def _stored(app, path):
    return os.path.exists(os.path.join(app.config["STORAGE_ROOT"], path))


def _mirrored(app, path):
    return os.path.exists(os.path.join(app.config["PUBLIC_MIRROR_ROOT"], path))


def _create(client, headers, **overrides):
    form = {"title": "Structural Design", "slug": "structural-design", "cover_photo": image_upload()}
    form.update(overrides)
    response = client.post(
        "/api/admin/services", data=form, headers=headers, content_type="multipart/form-data"
    )
    assert response.status_code == 201, response.get_json()
    return Service.query.filter_by(slug=form["slug"]).one()


def _update(client, headers, service, form):
    return client.post(
        f"/api/admin/services/{service.encoded_id}",
        data=form,
        headers=headers,
        content_type="multipart/form-data",
    )


class TestCoverPhoto:
    def test_cover_is_stored_and_mirrored(self, app, client, admin_headers):
        service = _create(client, admin_headers)
        assert service.cover_photo.startswith("services/covers/")
        assert _stored(app, service.cover_photo)
        assert _mirrored(app, service.cover_photo)

    def test_replacing_cover_removes_old_file(self, app, client, admin_headers):
        service = _create(client, admin_headers)
        old = service.cover_photo

        response = _update(client, admin_headers, service, {"cover_photo": image_upload("new.png")})

        assert response.status_code == 200
        new = db.session.get(Service, service.id).cover_photo
        assert new != old
        assert _stored(app, new)
        assert not _stored(app, old)
        assert not _mirrored(app, old)

    def test_omitted_cover_is_kept(self, app, client, admin_headers):
        service = _create(client, admin_headers)
        old = service.cover_photo

        response = _update(client, admin_headers, service, {"title": "Renamed"})

        assert response.status_code == 200
        service = db.session.get(Service, service.id)
        assert service.title == "Renamed"
        assert service.cover_photo == old
        assert _stored(app, old)

    def test_null_clears_cover(self, app, client, admin_headers):
        service = _create(client, admin_headers)
        old = service.cover_photo

        _update(client, admin_headers, service, {"cover_photo": "null"})

        assert db.session.get(Service, service.id).cover_photo is None
        assert not _stored(app, old)

    def test_failed_update_keeps_old_cover(self, app, client, admin_headers):
        _create(client, admin_headers, slug="taken")
        service = _create(client, admin_headers)
        old = service.cover_photo

        response = _update(
            client, admin_headers, service, {"slug": "taken", "cover_photo": image_upload("new.png")}
        )

        assert response.status_code == 422
        assert db.session.get(Service, service.id).cover_photo == old
        assert _stored(app, old)

    def test_wrong_image_type_is_rejected(self, client, admin_headers):
        response = client.post(
            "/api/admin/services",
            data={"title": "X", "slug": "x", "cover_photo": image_upload("cover.txt")},
            headers=admin_headers,
            content_type="multipart/form-data",
        )
        assert response.status_code == 422
        assert Service.query.count() == 0

    def test_non_image_content_with_image_extension_is_rejected(self, app, client, admin_headers):
        script = (io.BytesIO(b"#!/bin/sh\necho not an image\n"), "cover.png")
        response = client.post(
            "/api/admin/services",
            data={"title": "X", "slug": "x", "cover_photo": script},
            headers=admin_headers,
            content_type="multipart/form-data",
        )

        assert response.status_code == 422
        assert response.get_json()["message"] == "The cover photo must be an image."
        assert Service.query.count() == 0
        assert not os.path.exists(os.path.join(app.config["STORAGE_ROOT"], "services", "covers"))


class TestSections:
    def test_legacy_fields_fold_into_ordered_sections(self, client, admin_headers):
        service = _create(
            client,
            admin_headers,
            content1="Intro",
            caption1="Site A",
            image1=image_upload("a.png"),
            content2="Scope",
        )

        sections = service.sections
        assert [(s.order, s.content) for s in sections] == [(0, "Intro"), (1, "Scope")]
        assert sections[0].caption == "Site A"
        assert sections[0].image.startswith("services/sections/")
        assert sections[1].image is None

    def test_legacy_update_without_image_keeps_image_at_same_order(self, client, admin_headers):
        service = _create(client, admin_headers, content1="Intro", image1=image_upload("a.png"))
        image = service.sections[0].image

        _update(client, admin_headers, service, {"content1": "Intro, revised"})

        sections = ServiceSection.query.filter_by(service_id=service.id).all()
        assert len(sections) == 1
        assert sections[0].content == "Intro, revised"
        assert sections[0].image == image

    def test_structured_sections_keep_referenced_images(self, app, client, admin_headers):
        service = _create(
            client,
            admin_headers,
            **{
                "sections[0][content]": "Keep",
                "sections[0][image]": image_upload("keep.png"),
                "sections[1][content]": "Drop",
                "sections[1][image]": image_upload("drop.png"),
            },
        )
        keep, drop = [s.image for s in service.sections]

        response = _update(
            client,
            admin_headers,
            service,
            {
                "sections[0][content]": "Kept",
                "sections[0][image]": f"http://testserver/storage/{keep}",
            },
        )

        assert response.status_code == 200
        sections = ServiceSection.query.filter_by(service_id=service.id).all()
        assert [(s.content, s.image) for s in sections] == [("Kept", keep)]
        assert _stored(app, keep)
        assert not _stored(app, drop)

    def test_foreign_image_path_is_not_adopted(self, client, admin_headers):
        service = _create(client, admin_headers, content1="Intro")

        _update(
            client,
            admin_headers,
            service,
            {"sections[0][content]": "Intro", "sections[0][image]": "blogs/covers/other.png"},
        )

        section = ServiceSection.query.filter_by(service_id=service.id).one()
        assert section.image is None

    def test_deleting_service_removes_sections_and_files(self, app, client, admin_headers):
        service = _create(client, admin_headers, content1="Intro", image1=image_upload("a.png"))
        files = [service.cover_photo, service.sections[0].image]

        response = client.delete(f"/api/admin/services/{service.encoded_id}", headers=admin_headers)

        assert response.status_code == 200
        assert ServiceSection.query.count() == 0
        assert not any(_stored(app, path) for path in files)


class TestDisciplineLinks:
    def test_links_resolve_and_unknown_tokens_drop(self, client, admin_headers):
        created = client.post(
            "/api/admin/disciplines", json={"title": "Civil Works"}, headers=admin_headers
        )
        assert created.status_code == 201
        discipline = created.get_json()["data"]
        assert discipline["slug"] == "civil-works"

        service = _create(
            client, admin_headers, **{"discipline_ids[]": [discipline["id"], "bogus"]}
        )

        assert [d.slug for d in service.disciplines] == ["civil-works"]


class TestPublicServices:
    def test_public_list_hides_inactive(self, client, admin_headers):
        _create(client, admin_headers, slug="live")
        _create(client, admin_headers, slug="hidden", is_active="false")

        response = client.get("/api/public/services")

        assert [s["slug"] for s in response.get_json()["data"]] == ["live"]
        assert "is_active" not in response.get_json()["data"][0]


class TestToggleActive:
    def test_toggle_flips_and_persists(self, client, admin_headers):
        service = _create(client, admin_headers)

        response = client.patch(
            f"/api/admin/services/{service.encoded_id}/toggle-active", headers=admin_headers
        )

        assert response.status_code == 200
        assert response.get_json()["data"]["is_active"] is False
        assert db.session.get(Service, service.id).is_active is False

        client.patch(f"/api/admin/services/{service.encoded_id}/toggle-active", headers=admin_headers)
        assert db.session.get(Service, service.id).is_active is True

    def test_toggle_requires_edit_permission(self, client, admin_headers, make_user, auth_headers):
        service = _create(client, admin_headers)
        viewer = make_user(permissions=["view_services"])

        response = client.patch(
            f"/api/admin/services/{service.encoded_id}/toggle-active", headers=auth_headers(viewer)
        )

        assert response.status_code == 403
        assert response.get_json()["required_permission"] == "edit_services"
        assert db.session.get(Service, service.id).is_active is True
