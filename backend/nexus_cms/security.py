from nexus_cms.application.auth import is_token_revoked
from nexus_cms.extensions import db
from nexus_cms.models.user import User
from nexus_cms.utils.responses import error


def register_jwt_handlers(jwt):
    @jwt.user_lookup_loader
    def load_user(_jwt_header, jwt_data):
        user = db.session.get(User, int(jwt_data["sub"]))
        if user is None or not user.is_active:
            return None
        return user

    @jwt.token_in_blocklist_loader
    def check_revoked(_jwt_header, jwt_payload):
        return is_token_revoked(jwt_payload["jti"])

    @jwt.unauthorized_loader
    def missing_token(reason):
        return error("Unauthenticated", 401)

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return error("Invalid token", 401)

    @jwt.expired_token_loader
    def expired_token(_jwt_header, _jwt_payload):
        return error("Token has expired", 401)

    @jwt.revoked_token_loader
    def revoked_token(_jwt_header, _jwt_payload):
        return error("Token has been revoked", 401)

    @jwt.user_lookup_error_loader
    def unknown_user(_jwt_header, _jwt_payload):
        return error("Unauthenticated", 401)
