from flask import Blueprint

# Everything is mounted under /api by the app factory
api_bp = Blueprint("api", __name__)

# Import route modules so they register with api_bp
from . import health  # noqa: E402,F401
from .admin import admin_bp  # noqa: E402
from .public import public_bp  # noqa: E402

api_bp.register_blueprint(admin_bp, url_prefix="/admin")
api_bp.register_blueprint(public_bp, url_prefix="/public")
