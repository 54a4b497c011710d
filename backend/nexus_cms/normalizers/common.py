from nexus_cms.models.base import as_utc
from nexus_cms.utils.media import asset_url


def timestamp(value):
    value = as_utc(value)
    return value.isoformat() if value else None


def normalize_author(user):
    if user is None:
        return None
    return {
        "id": user.encoded_id,
        "name": user.name,
        "email": user.email,
    }


def normalize_section(section):
    return {
        "content": section.content,
        "image": asset_url(section.image),
        "caption": section.caption,
        "order": section.order,
    }


def normalize_sections(sections):
    return [normalize_section(s) for s in sorted(sections, key=lambda s: s.order)]


def normalize_link(item):
    return {"id": item.encoded_id, "title": item.title, "slug": item.slug}
