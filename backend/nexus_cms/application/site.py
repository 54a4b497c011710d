from typing import Any, Dict

from nexus_cms.models.project import Project
from nexus_cms.models.service import Service
from .feedback import testimonials


def home() -> Dict[str, Any]:
    services = (
        Service.query.filter(Service.is_active.is_(True))
        .order_by(Service.created_at.desc(), Service.id.desc())
        .limit(4)
        .all()
    )
    projects = (
        Project.query.filter(Project.is_active.is_(True))
        .order_by(Project.show_on_home.desc(), Project.created_at.desc(), Project.id.desc())
        .limit(6)
        .all()
    )
    return {
        "services": services,
        "testimonials": testimonials(),
        "projects": projects,
    }
