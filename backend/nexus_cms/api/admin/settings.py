from flask_jwt_extended import jwt_required

from nexus_cms.application import settings as settings_cases
from nexus_cms.normalizers.content import normalize_setting
from nexus_cms.utils.decorators import permission_required
from nexus_cms.utils.request_data import request_payload
from nexus_cms.utils.responses import success
from . import admin_bp


@admin_bp.route("/settings", methods=["GET"])
@jwt_required()
@permission_required("view_settings")
def get_settings():
    setting = settings_cases.get_settings()
    return success(normalize_setting(setting), "Settings retrieved successfully")


@admin_bp.route("/settings", methods=["PUT", "POST"])
@jwt_required()
@permission_required("edit_settings")
def update_settings():
    setting = settings_cases.update_settings(data=request_payload())
    return success(normalize_setting(setting), "Setting updated successfully")
