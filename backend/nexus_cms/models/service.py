from nexus_cms.extensions import db
from .base import BaseModel, SecureIdMixin, SectionMixin
from .discipline import service_disciplines


class Service(BaseModel, SecureIdMixin):
    __tablename__ = "services"

    not_found_message = "Service not found"

    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    slug = db.Column(db.String(255), nullable=False, unique=True, index=True)
    cover_photo = db.Column(db.String(255), nullable=True)
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    author = db.relationship("User", lazy="joined")
    sections = db.relationship(
        "ServiceSection",
        order_by="ServiceSection.order",
        cascade="all, delete-orphan",
    )
    disciplines = db.relationship("Discipline", secondary=service_disciplines, back_populates="services")


class ServiceSection(BaseModel, SectionMixin):
    __tablename__ = "service_sections"

    service_id = db.Column(db.Integer, db.ForeignKey("services.id", ondelete="CASCADE"), nullable=False, index=True)
