from nexus_cms.extensions import db
from .base import BaseModel, SecureIdMixin, SectionMixin

service_disciplines = db.Table(
    "discipline_service",
    db.Column("service_id", db.Integer, db.ForeignKey("services.id", ondelete="CASCADE"), primary_key=True),
    db.Column("discipline_id", db.Integer, db.ForeignKey("disciplines.id", ondelete="CASCADE"), primary_key=True),
)

project_disciplines = db.Table(
    "discipline_project",
    db.Column("project_id", db.Integer, db.ForeignKey("projects.id", ondelete="CASCADE"), primary_key=True),
    db.Column("discipline_id", db.Integer, db.ForeignKey("disciplines.id", ondelete="CASCADE"), primary_key=True),
)


class Discipline(BaseModel, SecureIdMixin):
    __tablename__ = "disciplines"

    not_found_message = "Discipline not found"

    title = db.Column(db.String(255), nullable=False)
    slug = db.Column(db.String(255), nullable=False, unique=True, index=True)
    description = db.Column(db.Text, nullable=True)
    cover_photo = db.Column(db.String(255), nullable=True)
    show_on_home = db.Column(db.Boolean, nullable=False, default=False)
    order = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    author = db.relationship("User", lazy="joined")
    sections = db.relationship(
        "DisciplineSection",
        order_by="DisciplineSection.order",
        cascade="all, delete-orphan",
    )
    services = db.relationship("Service", secondary=service_disciplines, back_populates="disciplines")
    projects = db.relationship("Project", secondary=project_disciplines, back_populates="disciplines")


class DisciplineSection(BaseModel, SectionMixin):
    __tablename__ = "discipline_sections"

    discipline_id = db.Column(
        db.Integer, db.ForeignKey("disciplines.id", ondelete="CASCADE"), nullable=False, index=True
    )
