class ApiError(Exception):
    """Base class for errors that map onto an API envelope."""

    status_code = 500
    default_message = "Operation failed"

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"success": False, "message": self.message}


class ValidationError(ApiError):
    status_code = 422
    default_message = "The given data was invalid"


class Unauthenticated(ApiError):
    status_code = 401
    default_message = "Unauthenticated"


class Forbidden(ApiError):
    status_code = 403
    default_message = "You do not have permission to access this resource"

    def __init__(self, message=None, required_permission=None):
        super().__init__(message)
        self.required_permission = required_permission

    def to_dict(self):
        data = super().to_dict()
        if self.required_permission:
            data["required_permission"] = self.required_permission
        return data


class NotFound(ApiError):
    status_code = 404
    default_message = "Resource not found"


class Conflict(ApiError):
    status_code = 422
    default_message = "The request conflicts with the current state"
