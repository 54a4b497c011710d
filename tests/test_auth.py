"""Tests for login, token revocation and verified profile changes."""

from datetime import datetime, timedelta, timezone

from nexus_cms.extensions import db
from nexus_cms.models.user import User


def _login(client, email="editor@example.com", password="secret-pass"):
    return client.post("/api/admin/auth/login", json={"email": email, "password": password})


class TestLogin:
    def test_valid_credentials_issue_a_token(self, client, make_user):
        make_user(permissions=["view_blogs"])

        response = _login(client, email="Editor@Example.com")

        assert response.status_code == 200
        data = response.get_json()["data"]
        assert data["token_type"] == "bearer"
        assert data["expires_in"] == 3600
        assert data["admin"]["permissions"] == ["view_blogs"]

        profile = client.get(
            "/api/admin/auth/profile", headers={"Authorization": f"Bearer {data['token']}"}
        )
        assert profile.get_json()["data"]["email"] == "editor@example.com"

    def test_wrong_password_is_401(self, client, make_user):
        make_user()
        response = _login(client, password="wrong-pass")
        assert response.status_code == 401
        assert response.get_json()["message"] == "Authentication failed"

    def test_unknown_email_is_401(self, client):
        assert _login(client, email="nobody@example.com").status_code == 401

    def test_inactive_account_is_403(self, client, make_user):
        make_user(is_active=False)
        assert _login(client).status_code == 403

    def test_logout_revokes_the_token(self, client, make_user):
        make_user()
        token = _login(client).get_json()["data"]["token"]
        headers = {"Authorization": f"Bearer {token}"}

        assert client.post("/api/admin/auth/logout", headers=headers).status_code == 200

        response = client.get("/api/admin/auth/profile", headers=headers)
        assert response.status_code == 401
        assert response.get_json()["message"] == "Token has been revoked"

    def test_refresh_issues_a_new_token_and_revokes_the_old(self, client, make_user):
        make_user()
        token = _login(client).get_json()["data"]["token"]
        headers = {"Authorization": f"Bearer {token}"}

        refreshed = client.post("/api/admin/auth/refresh", headers=headers)

        assert refreshed.status_code == 200
        new_token = refreshed.get_json()["data"]["token"]
        assert client.get("/api/admin/auth/profile", headers=headers).status_code == 401
        assert client.get(
            "/api/admin/auth/profile", headers={"Authorization": f"Bearer {new_token}"}
        ).status_code == 200


class TestVerifiedProfileUpdate:
    def test_code_is_stored_even_without_mail(self, client, make_user, auth_headers):
        user = make_user()

        response = client.post("/api/admin/auth/settings/request-update", headers=auth_headers(user))

        assert response.status_code == 200
        user = db.session.get(User, user.id)
        assert len(user.email_verification_code) == 6
        assert user.email_verification_expires_at is not None

    def test_wrong_code_is_rejected(self, client, make_user, auth_headers):
        user = make_user()
        client.post("/api/admin/auth/settings/request-update", headers=auth_headers(user))

        code = db.session.get(User, user.id).email_verification_code
        wrong = "000000" if code != "000000" else "111111"
        response = client.post(
            "/api/admin/auth/settings/confirm-update",
            json={"code": wrong, "name": "Changed"},
            headers=auth_headers(user),
        )

        assert response.status_code == 403
        assert db.session.get(User, user.id).name == "Editor"

    def test_expired_code_is_rejected(self, client, make_user, auth_headers):
        user = make_user()
        user.email_verification_code = "123456"
        user.email_verification_expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
        db.session.commit()

        response = client.post(
            "/api/admin/auth/settings/confirm-update",
            json={"code": "123456", "name": "Changed"},
            headers=auth_headers(user),
        )

        assert response.status_code == 403

    def test_valid_code_applies_changes_once(self, client, make_user, auth_headers):
        user = make_user()
        headers = auth_headers(user)
        client.post("/api/admin/auth/settings/request-update", headers=headers)
        code = db.session.get(User, user.id).email_verification_code

        response = client.post(
            "/api/admin/auth/settings/confirm-update",
            json={"code": code, "name": "Renamed", "password": "new-secret-pass"},
            headers=headers,
        )

        assert response.status_code == 200
        user = db.session.get(User, user.id)
        assert user.name == "Renamed"
        assert user.check_password("new-secret-pass")
        assert user.email_verification_code is None

        replay = client.post(
            "/api/admin/auth/settings/confirm-update",
            json={"code": code, "name": "Again"},
            headers=headers,
        )
        assert replay.status_code == 403
