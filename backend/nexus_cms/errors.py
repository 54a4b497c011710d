from flask import current_app
from werkzeug.exceptions import HTTPException

from nexus_cms.domain.exceptions import ApiError
from nexus_cms.utils.responses import error

HTTP_MESSAGES = {
    400: "Bad request",
    404: "Resource not found",
    405: "Method not allowed",
    413: "Uploaded content is too large",
}


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(exc):
        body = exc.to_dict()
        body.pop("success", None)
        message = body.pop("message")
        return error(message, exc.status_code, **body)

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc):
        code = exc.code or 500
        return error(HTTP_MESSAGES.get(code, "Operation failed"), code)

    @app.errorhandler(Exception)
    def handle_unexpected(exc):
        # Never leak internals to the client
        current_app.logger.exception(f"Unhandled exception: {exc}")
        return error("Operation failed", 500)

