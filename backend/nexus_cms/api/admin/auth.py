from flask_jwt_extended import current_user, jwt_required

from nexus_cms.application import auth as auth_cases
from nexus_cms.normalizers.user import normalize_login, normalize_user
from nexus_cms.utils.request_data import request_payload
from nexus_cms.utils.responses import success
from . import admin_bp


@admin_bp.route("/auth/login", methods=["POST"])
def login():
    result = auth_cases.login(data=request_payload())
    return success(
        {
            "admin": normalize_login(result["user"]),
            "token": result["token"],
            "token_type": result["token_type"],
            "expires_in": result["expires_in"],
        },
        "Login successful",
    )


@admin_bp.route("/auth/logout", methods=["POST"])
@jwt_required()
def logout():
    auth_cases.revoke_current_token()
    return success(None, "Successfully logged out")


@admin_bp.route("/auth/refresh", methods=["POST"])
@jwt_required()
def refresh():
    result = auth_cases.refresh(user=current_user)
    return success(
        {
            "admin": normalize_login(current_user),
            **result,
        },
        "Token refreshed successfully",
    )


@admin_bp.route("/auth/profile", methods=["GET"])
@jwt_required()
def profile():
    return success(normalize_user(current_user), "Profile retrieved successfully")


@admin_bp.route("/auth/settings/request-update", methods=["POST"])
@jwt_required()
def request_profile_update():
    auth_cases.request_profile_update(user=current_user)
    return success(None, "Verification code sent to your email")


@admin_bp.route("/auth/settings/confirm-update", methods=["POST"])
@jwt_required()
def confirm_profile_update():
    user = auth_cases.confirm_profile_update(user=current_user, data=request_payload())
    return success(normalize_user(user), "Profile updated successfully")
