from nexus_cms.application.projects import projects
from nexus_cms.normalizers.content import normalize_project
from . import admin_bp
from .crud import register_crud

register_crud(
    admin_bp,
    resource="projects",
    repository=projects,
    normalize=normalize_project,
    permission="projects",
    noun="projects",
)
