import logging
import os

from flask import Flask, current_app, send_file, send_from_directory
from flask.logging import default_handler
from flask_swagger_ui import get_swaggerui_blueprint

from .api import api_bp
from .cli import register_commands
from .config import config_by_name
from .errors import register_error_handlers
from .extensions import db, jwt, migrate
from .security import register_jwt_handlers

LOG_FORMAT = "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"


def configure_logging(app: Flask) -> None:
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    if not isinstance(level, int):
        level = logging.INFO

    default_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    app.logger.setLevel(level)


def create_app(config_name: str = "development", **overrides) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])
    app.config.update(overrides)

    # Storage roots are resolved once so every helper sees absolute paths
    for key in ("STORAGE_ROOT", "PUBLIC_MIRROR_ROOT"):
        if app.config.get(key):
            app.config[key] = os.path.abspath(app.config[key])

    configure_logging(app)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    register_jwt_handlers(jwt)

    # Models must be imported for metadata and migrations
    from . import models  # noqa: F401

    # -------------------------------------------------
    # API Blueprints
    # -------------------------------------------------
    app.register_blueprint(api_bp, url_prefix="/api")
    register_error_handlers(app)
    register_commands(app)

    # -------------------------------------------------
    # Public storage (self-hosted deployments)
    # -------------------------------------------------
    @app.route("/storage/<path:filename>", methods=["GET"], endpoint="storage")
    def serve_storage(filename):
        root = current_app.config.get("PUBLIC_MIRROR_ROOT") or current_app.config["STORAGE_ROOT"]
        return send_from_directory(root, filename)

    # -------------------------------------------------
    # Serve OpenAPI YAML
    # -------------------------------------------------
    @app.route("/openapi/cms.yaml", methods=["GET"], endpoint="openapi_cms")
    def serve_openapi():
        spec_path = os.path.join(current_app.root_path, "api", "cms_openapi.yaml")
        return send_file(spec_path, mimetype="application/yaml", as_attachment=False)

    # -------------------------------------------------
    # Swagger UI
    # -------------------------------------------------
    SWAGGER_URL = "/swagger"
    API_URL = "/openapi/cms.yaml"

    swaggerui_blueprint = get_swaggerui_blueprint(
        SWAGGER_URL,
        API_URL,
        config={
            "app_name": "Nexus Engineering CMS API",
            "deepLinking": True,
            "persistAuthorization": True,
        },
    )

    app.register_blueprint(swaggerui_blueprint, url_prefix=SWAGGER_URL)

    return app
