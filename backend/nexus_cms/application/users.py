from typing import Any, Dict, List

from nexus_cms.domain.exceptions import Conflict, Forbidden, ValidationError
from nexus_cms.domain.permissions import PERMISSIONS, WILDCARD, group_permissions
from nexus_cms.models.user import Permission, User
from nexus_cms.utils import validation
from nexus_cms.utils.transaction import transactional
from .repository import ResourceRepository


class UserRepository(ResourceRepository):
    model = User
    label = "Admin"
    search_fields = ("name", "email")
    image_fields = {"profile_image": "profile-images"}
    duplicate_message = "The email has already been taken."

    def clean(self, data, instance=None):
        attrs: Dict[str, Any] = {}

        if self.wants(data, "name", instance):
            attrs["name"] = validation.string(data, "name", required=True, max_length=255)
        if self.wants(data, "email", instance):
            attrs["email"] = validation.email(data, "email", required=True)
            self.assert_unique("email", attrs["email"], instance)
        if "bio" in data:
            attrs["bio"] = validation.string(data, "bio")

        is_active = validation.boolean(data, "is_active")
        if is_active is not None:
            attrs["is_active"] = is_active

        if "permissions" in data:
            _permission_names(data.get("permissions"))

        password = validation.password(data, required=instance is None)
        if password is not None:
            attrs["password"] = password

        return attrs

    def after_write(self, item, data, changes):
        if "permissions" in data:
            _replace_permissions(item, _permission_names(data.get("permissions")))

    def list(self, filters=None, *, active_only=False):
        # Super-admins are not managed through the admin list
        return [user for user in super().list(filters, active_only=active_only) if not user.is_super_admin]

    def assert_deletable(self, item, actor=None):
        if actor is not None and item.id == actor.id:
            raise Conflict("Cannot delete your own account")
        if item.is_super_admin:
            raise Forbidden("Cannot delete super admin")

    def assert_editable(self, item, data, actor=None):
        if actor is None:
            return
        if item.is_super_admin and item.id != actor.id:
            raise Forbidden("Cannot modify super admin")
        if item.id == actor.id and "permissions" in data:
            raise Conflict("You cannot change your own permissions")
        status = validation.boolean(data, "is_active")
        if status is not None:
            self.assert_status_change(item, status, actor=actor)

    def assert_status_change(self, item, status, actor=None):
        if actor is not None and item.id == actor.id and not status:
            raise Conflict("Cannot deactivate your own account")
        if item.is_super_admin and not status:
            raise Forbidden("Cannot deactivate super admin")


users = UserRepository()


def _permission_names(names) -> List[str]:
    if names is None:
        return []
    if isinstance(names, str):
        names = [n.strip() for n in names.split(",") if n.strip()]
    if not isinstance(names, list):
        raise ValidationError("The permissions must be an array.")

    unknown = [name for name in names if name not in PERMISSIONS]
    if unknown:
        raise ValidationError(f"The selected permissions are invalid: {', '.join(unknown)}")
    return list(dict.fromkeys(names))


def _replace_permissions(user: User, names: List[str]) -> None:
    """Replace a user's direct permissions. The wildcard grant is preserved."""
    wildcard = [p for p in user.permissions if p.name == WILDCARD]
    user.permissions = wildcard + [Permission.get_or_create(name) for name in names]


def set_permissions(user: User, names) -> User:
    names = _permission_names(names)
    with transactional():
        _replace_permissions(user, names)
    return user


def assign_permissions(*, token: str, data: Dict[str, Any], actor: User) -> User:
    user = users.get(token)
    if user.id == actor.id:
        raise Conflict("You cannot change your own permissions")
    if "permissions" not in data:
        raise ValidationError("The permissions field is required.")
    return set_permissions(user, data.get("permissions"))


def permission_catalogue() -> Dict[str, Any]:
    return {
        "permissions": PERMISSIONS,
        "grouped": group_permissions(PERMISSIONS),
    }

