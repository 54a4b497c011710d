from nexus_cms.extensions import db
from .base import BaseModel, SecureIdMixin, SectionMixin
from .discipline import project_disciplines


class Project(BaseModel, SecureIdMixin):
    __tablename__ = "projects"

    not_found_message = "Project not found"

    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    slug = db.Column(db.String(255), nullable=False, unique=True, index=True)
    cover_photo = db.Column(db.String(255), nullable=True)
    show_on_home = db.Column(db.Boolean, nullable=False, default=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)
    created_by = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    author = db.relationship("User", lazy="joined")
    sections = db.relationship(
        "ProjectSection",
        order_by="ProjectSection.order",
        cascade="all, delete-orphan",
    )
    disciplines = db.relationship("Discipline", secondary=project_disciplines, back_populates="projects")


class ProjectSection(BaseModel, SectionMixin):
    __tablename__ = "project_sections"

    project_id = db.Column(db.Integer, db.ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
