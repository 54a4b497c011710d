from nexus_cms.utils.media import asset_url
from .common import timestamp


def normalize_user(user, include_permissions=True):
    data = {
        "id": user.encoded_id,
        "name": user.name,
        "email": user.email,
        "profile_image": asset_url(user.profile_image),
        "bio": user.bio,
        "is_active": user.is_active,
        "created_at": timestamp(user.created_at),
        "updated_at": timestamp(user.updated_at),
    }
    if include_permissions:
        data["permissions"] = sorted(user.permission_names())
        data["roles"] = user.role_names()
    return data


def normalize_login(user):
    return {
        "id": user.encoded_id,
        "name": user.name,
        "email": user.email,
        "profile_image": asset_url(user.profile_image),
        "permissions": sorted(user.permission_names()),
    }
