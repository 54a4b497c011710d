from nexus_cms.extensions import db
from .base import BaseModel, SecureIdMixin


class Feedback(BaseModel, SecureIdMixin):
    __tablename__ = "feedbacks"

    not_found_message = "Feedback not found"

    name = db.Column(db.String(255), nullable=False)
    title = db.Column(db.String(255), nullable=True)
    message = db.Column(db.Text, nullable=False)
    image = db.Column(db.String(255), nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)
