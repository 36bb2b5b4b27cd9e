"""
Domain errors raised by the auth core and the resource handlers.
Each carries the HTTP status the boundary (api/errors.py) answers with.
"""
from __future__ import annotations


class ApiError(Exception):
    status = 500
    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApiError):
    status = 400
    default_message = "Invalid input"


class AuthenticationError(ApiError):
    status = 401
    default_message = "Unauthorized"


class NotFoundError(ApiError):
    status = 404
    default_message = "Resource not found"


class ConflictError(ApiError):
    status = 409
    default_message = "Conflict"


class InternalError(ApiError):
    status = 500
