from datetime import datetime, timezone

from nexus_cms.domain.exceptions import NotFound
from nexus_cms.extensions import db
from nexus_cms.utils.secure_id import decode_id, encode_id


def utc_now():
    return datetime.now(timezone.utc)


class BaseModel(db.Model):
    __abstract__ = True

    id = db.Column(db.Integer, primary_key=True, autoincrement=True)
    created_at = db.Column(db.DateTime(timezone=True), default=utc_now, index=True)
    updated_at = db.Column(db.DateTime(timezone=True), default=utc_now, onupdate=utc_now)


class SecureIdMixin:
    """Expose rows by an opaque token instead of their primary key."""

    not_found_message = "Resource not found"

    @property
    def encoded_id(self) -> str:
        return encode_id(self.id)

    @classmethod
    def find_by_token(cls, token):
        row_id = decode_id(token)
        if row_id is None:
            return None
        return db.session.get(cls, row_id)

    @classmethod
    def find_by_token_or_404(cls, token):
        row = cls.find_by_token(token)
        if row is None:
            raise NotFound(cls.not_found_message)
        return row


class SectionMixin:
    """Ordered body block owned by a content item."""

    content = db.Column(db.Text, nullable=True)
    image = db.Column(db.String(255), nullable=True)
    caption = db.Column(db.String(255), nullable=True)
    order = db.Column(db.Integer, nullable=False, default=0)


def as_utc(value):
    """SQLite hands timestamps back naive; treat them as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
