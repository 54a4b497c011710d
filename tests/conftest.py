"""Pytest configuration and fixtures."""

import io

import pytest
from flask_jwt_extended import create_access_token
from PIL import Image

from nexus_cms import create_app
from nexus_cms.extensions import db
from nexus_cms.models.blog import Blog
from nexus_cms.models.feedback import Feedback
from nexus_cms.models.job import Job
from nexus_cms.models.user import Permission, User


def _png_bytes():
    buffer = io.BytesIO()
    Image.new("RGB", (1, 1), "white").save(buffer, "PNG")
    return buffer.getvalue()


# A real 1x1 PNG, uploads are decoded before they are stored
PNG_BYTES = _png_bytes()


@pytest.fixture
def app(tmp_path):
    """Application bound to an in-memory database and a throwaway storage tree."""
    app = create_app(
        "testing",
        STORAGE_ROOT=str(tmp_path / "storage"),
        PUBLIC_MIRROR_ROOT=str(tmp_path / "public"),
    )
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def make_user(app):
    """Factory for admins holding a given set of permission names."""

    def _make(email="editor@example.com", permissions=(), password="secret-pass", is_active=True):
        user = User(name=email.split("@")[0].title(), email=email, is_active=is_active)
        user.set_password(password)
        user.permissions = [Permission.get_or_create(name) for name in permissions]
        db.session.add(user)
        db.session.commit()
        return user

    return _make


@pytest.fixture
def auth_headers(app):
    def _headers(user):
        token = create_access_token(identity=str(user.id))
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def super_admin(make_user):
    return make_user("root@example.com", permissions=["*"])


@pytest.fixture
def admin_headers(super_admin, auth_headers):
    return auth_headers(super_admin)


def image_upload(name="photo.png"):
    """A fresh upload tuple for the test client (streams are single use)."""
    return (io.BytesIO(PNG_BYTES), name)


def document_upload(name="resume.pdf", size=128):
    return (io.BytesIO(b"%PDF-1.4\n" + b"0" * size), name)


@pytest.fixture
def make_blog(app):
    def _make(slug="first-post", **overrides):
        values = {
            "title": slug.replace("-", " ").title(),
            "slug": slug,
            "category": "news",
            "content": "<p>Body</p>",
            "cover_photo": "blogs/covers/seed.png",
        }
        values.update(overrides)
        blog = Blog(**values)
        db.session.add(blog)
        db.session.commit()
        return blog

    return _make


@pytest.fixture
def make_job(app):
    def _make(slug="site-engineer", **overrides):
        values = {
            "title": slug.replace("-", " ").title(),
            "slug": slug,
            "location": "Lagos",
            "type": "full-time",
            "key_responsibilities": "Supervise works",
            "preferred_qualifications": "B.Eng",
        }
        values.update(overrides)
        job = Job(**values)
        db.session.add(job)
        db.session.commit()
        return job

    return _make


@pytest.fixture
def make_feedback(app):
    def _make(name="Ada", **overrides):
        feedback = Feedback(name=name, message=overrides.pop("message", "Great work"), **overrides)
        db.session.add(feedback)
        db.session.commit()
        return feedback

    return _make
