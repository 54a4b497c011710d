"""Tests for the permission gate."""

import pytest

from nexus_cms.domain.exceptions import Forbidden, Unauthenticated
from nexus_cms.domain.permissions import check_permission, group_permissions
from nexus_cms.extensions import db
from nexus_cms.models.blog import Blog


class Principal:
    def __init__(self, *names):
        self.names = set(names)

    def permission_names(self):
        return self.names


class TestCheckPermission:
    def test_missing_principal_is_unauthenticated(self):
        with pytest.raises(Unauthenticated):
            check_permission(None, "view_blogs")

    def test_granted_permission_passes(self):
        check_permission(Principal("view_blogs"), "view_blogs")

    def test_wildcard_grants_everything(self):
        check_permission(Principal("*"), "delete_admins")

    def test_missing_permission_names_the_requirement(self):
        with pytest.raises(Forbidden) as excinfo:
            check_permission(Principal("view_blogs"), "edit_blogs")
        assert excinfo.value.required_permission == "edit_blogs"
        assert excinfo.value.status_code == 403

    def test_group_by_verb(self):
        groups = group_permissions(["view_blogs", "edit_blogs", "view_jobs"])
        assert groups == {"view": ["view_blogs", "view_jobs"], "edit": ["edit_blogs"]}


class TestPermissionRoutes:
    def test_request_without_token_is_401(self, client):
        response = client.get("/api/admin/blogs")
        assert response.status_code == 401
        assert response.get_json()["success"] is False

    def test_view_only_principal_cannot_edit(self, client, make_user, make_blog, auth_headers):
        blog = make_blog(title="Original")
        viewer = make_user(permissions=["view_blogs"])

        response = client.put(
            f"/api/admin/blogs/{blog.encoded_id}",
            json={"title": "Changed"},
            headers=auth_headers(viewer),
        )

        assert response.status_code == 403
        body = response.get_json()
        assert body["success"] is False
        assert body["required_permission"] == "edit_blogs"
        assert db.session.get(Blog, blog.id).title == "Original"

    def test_view_permission_allows_listing(self, client, make_user, make_blog, auth_headers):
        make_blog()
        viewer = make_user(permissions=["view_blogs"])

        response = client.get("/api/admin/blogs", headers=auth_headers(viewer))

        assert response.status_code == 200
        assert len(response.get_json()["data"]) == 1

    def test_inactive_principal_is_rejected(self, client, make_user, auth_headers):
        user = make_user(permissions=["*"], is_active=False)
        response = client.get("/api/admin/blogs", headers=auth_headers(user))
        assert response.status_code == 401
