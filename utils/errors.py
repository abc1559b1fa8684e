"""JSON API error types carrying a machine-readable error code."""

from __future__ import annotations

from werkzeug.exceptions import HTTPException


class APIError(HTTPException):
    """Base class for errors rendered as ``{"error": <error_code>, ...}``."""

    code = 500
    error_code = "server_error"
    description = "An unexpected error occurred."

    def __init__(self, description: str | None = None, *, error_code: str | None = None):
        super().__init__(description)
        if error_code:
            self.error_code = error_code


class ValidationError(APIError):
    code = 400
    error_code = "validation_error"
    description = "The request payload is invalid."


class MissingFields(ValidationError):
    error_code = "missing_fields"

    def __init__(self, fields, *, error_code: str | None = None):
        self.fields = sorted(fields)
        super().__init__(
            "Missing required fields: {}.".format(", ".join(self.fields)),
            error_code=error_code,
        )


class AuthenticationError(APIError):
    code = 401
    error_code = "invalid_credentials"
    description = "Invalid phone or password."


class PermissionDenied(APIError):
    code = 403
    error_code = "forbidden"
    description = "You are not allowed to perform this action."


class NotFoundError(APIError):
    code = 404
    error_code = "not_found"
    description = "Resource not found."


class ConflictError(APIError):
    code = 409
    error_code = "conflict"
    description = "The resource already exists."


class StoreError(APIError):
    """Persistence failure; details are logged, never returned."""

    error_code = "db_error"
    description = "A database error occurred."


class ServerError(APIError):
    error_code = "server_error"


def error_code_for(error: HTTPException) -> str:
    """Return the error code for any HTTP exception, e.g. ``too_many_requests``."""

    code = getattr(error, "error_code", None)
    if code:
        return code
    name = getattr(error, "name", None) or "error"
    return name.strip().lower().replace(" ", "_").replace("'", "")
