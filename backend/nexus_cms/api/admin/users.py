from flask_jwt_extended import current_user, jwt_required

from nexus_cms.application import users as user_cases
from nexus_cms.application.users import users
from nexus_cms.normalizers.user import normalize_user
from nexus_cms.utils.decorators import permission_required
from nexus_cms.utils.request_data import request_payload
from nexus_cms.utils.responses import success
from . import admin_bp
from .crud import register_crud


def _normalize(user, admin=True):
    return normalize_user(user)


register_crud(
    admin_bp,
    resource="users",
    repository=users,
    normalize=_normalize,
    permission="admins",
    noun="admins",
    by_slug=False,
)


@admin_bp.route("/permissions", methods=["GET"])
@jwt_required()
@permission_required("view_permissions")
def list_permissions():
    return success(user_cases.permission_catalogue(), "Permissions retrieved successfully")


@admin_bp.route("/permissions/assign/<token>", methods=["POST", "PUT"])
@jwt_required()
@permission_required("assign_permissions")
def assign_permissions(token):
    user = user_cases.assign_permissions(token=token, data=request_payload(), actor=current_user)
    return success(normalize_user(user), "Permissions updated successfully")
