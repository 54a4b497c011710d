from nexus_cms.utils.media import asset_url
from .common import normalize_author, normalize_link, normalize_sections, timestamp


def normalize_discipline(discipline, admin=False, include_sections=True):
    data = {
        "id": discipline.encoded_id,
        "title": discipline.title,
        "slug": discipline.slug,
        "description": discipline.description,
        "cover_photo": asset_url(discipline.cover_photo),
        "show_on_home": discipline.show_on_home,
        "order": discipline.order,
    }
    if include_sections:
        data["sections"] = normalize_sections(discipline.sections)
    if admin:
        data["is_active"] = discipline.is_active
        data["author"] = normalize_author(discipline.author)
        data["created_at"] = timestamp(discipline.created_at)
        data["updated_at"] = timestamp(discipline.updated_at)
    return data


def _normalize_offering(item, admin):
    data = {
        "id": item.encoded_id,
        "title": item.title,
        "description": item.description,
        "slug": item.slug,
        "cover_photo": asset_url(item.cover_photo),
        "sections": normalize_sections(item.sections),
        "disciplines": [normalize_link(d) for d in item.disciplines],
        "author": normalize_author(item.author),
        "created_at": timestamp(item.created_at),
        "updated_at": timestamp(item.updated_at),
    }
    if admin:
        data["is_active"] = item.is_active
    return data


def normalize_service(service, admin=False):
    return _normalize_offering(service, admin)


def normalize_project(project, admin=False):
    data = _normalize_offering(project, admin)
    data["show_on_home"] = project.show_on_home
    return data


def normalize_feedback(feedback, admin=False):
    data = {
        "id": feedback.encoded_id,
        "name": feedback.name,
        "title": feedback.title,
        "message": feedback.message,
        "image": asset_url(feedback.image),
        "created_at": timestamp(feedback.created_at),
    }
    if admin:
        data["is_active"] = feedback.is_active
        data["updated_at"] = timestamp(feedback.updated_at)
    return data


def normalize_setting(setting):
    return {
        "our_mission": setting.our_mission,
        "our_vision": setting.our_vision,
        "years": setting.years,
        "projects": setting.projects,
        "clients": setting.clients,
        "engineers": setting.engineers,
        "portfolio": setting.portfolio,
        "image": asset_url(setting.image),
    }
