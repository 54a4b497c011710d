from nexus_cms.application import site
from nexus_cms.application.disciplines import disciplines
from nexus_cms.application.projects import projects
from nexus_cms.application.services import services
from nexus_cms.application.settings import get_settings
from nexus_cms.normalizers.content import (
    normalize_discipline,
    normalize_feedback,
    normalize_project,
    normalize_service,
    normalize_setting,
)
from nexus_cms.utils.responses import success
from . import public_bp


@public_bp.route("/services", methods=["GET"])
def list_services():
    items = services.list(active_only=True)
    return success([normalize_service(s) for s in items], "Services retrieved successfully")


@public_bp.route("/services/<slug>", methods=["GET"])
def show_service(slug):
    service = services.get_by_slug(slug, active_only=True)
    return success(normalize_service(service), "Service retrieved successfully")


@public_bp.route("/projects", methods=["GET"])
def list_projects():
    items = projects.list(active_only=True)
    return success([normalize_project(p) for p in items], "Projects retrieved successfully")


@public_bp.route("/projects/<slug>", methods=["GET"])
def show_project(slug):
    project = projects.get_by_slug(slug, active_only=True)
    return success(normalize_project(project), "Project retrieved successfully")


@public_bp.route("/disciplines", methods=["GET"])
def list_disciplines():
    items = disciplines.list_public()
    return success([normalize_discipline(d) for d in items], "Disciplines retrieved successfully")


@public_bp.route("/disciplines/<token>", methods=["GET"])
def show_discipline(token):
    discipline = disciplines.get_public(token)
    return success(normalize_discipline(discipline), "Discipline retrieved successfully")


@public_bp.route("/home", methods=["GET"])
def home():
    data = site.home()
    return success(
        {
            "services": [normalize_service(s) for s in data["services"]],
            "testimonials": [normalize_feedback(f) for f in data["testimonials"]],
            "projects": [normalize_project(p) for p in data["projects"]],
        },
        "Home data retrieved successfully",
    )


@public_bp.route("/about", methods=["GET"])
def about():
    return success(normalize_setting(get_settings()), "About retrieved successfully")
