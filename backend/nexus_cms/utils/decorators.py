from functools import wraps

from flask import current_app
from flask_jwt_extended import current_user

from nexus_cms.domain.exceptions import Forbidden
from nexus_cms.domain.permissions import check_permission


def permission_required(permission: str):
    """
    Gate a view on a named permission.

    Stack below ``@jwt_required()`` so the principal is already loaded.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                check_permission(current_user, permission)
            except Forbidden:
                current_app.logger.warning(
                    f"Permission denied: {permission} for user {getattr(current_user, 'id', None)}"
                )
                raise
            return fn(*args, **kwargs)
        return wrapper
    return decorator
