from flask import current_app
from werkzeug.exceptions import HTTPException
from werkzeug.http import HTTP_STATUS_CODES
from marshmallow import ValidationError as SchemaValidationError
from sqlalchemy.exc import IntegrityError

from api.formatters import format_response
from models import storage
from utils.errors import ApiError


def error_response(message: str, status: int, details: dict | None = None):
    payload = {"error": HTTP_STATUS_CODES.get(status, "Error"), "message": message, "status": status}
    if details:
        payload["details"] = details
    return format_response(payload, status)


def _first_message(messages) -> str:
    """Dig the first human-readable message out of marshmallow's nested error dict."""
    if isinstance(messages, str):
        return messages
    if isinstance(messages, dict):
        for value in messages.values():
            return _first_message(value)
    if isinstance(messages, (list, tuple)) and messages:
        return _first_message(messages[0])
    return "Invalid input"


def register_error_handlers(app):
    # Domain errors raised by the auth service and resource handlers
    @app.errorhandler(ApiError)
    def handle_api_error(err: ApiError):
        if err.status >= 500:
            current_app.logger.error("%s: %s", err.__class__.__name__, err.message)
        return error_response(err.message, err.status)

    # Request schema failures map to 400
    @app.errorhandler(SchemaValidationError)
    def handle_validation_error(err: SchemaValidationError):
        # err.messages contains field-level details
        return error_response(_first_message(err.messages), 400, details=err.messages)

    # Integrity errors (unique constraints, FK violations, check constraints)
    @app.errorhandler(IntegrityError)
    def handle_integrity_error(err: IntegrityError):
        storage.rollback()
        lower_msg = str(getattr(err, "orig", err)).lower()
        current_app.logger.warning("integrity error: %s", lower_msg)
        # Database text stays in the log, never in the response
        if "unique constraint" in lower_msg or "unique violation" in lower_msg:
            return error_response("Unique constraint violated.", 409)
        return error_response("Integrity error.", 400)

    # Werkzeug HTTPExceptions (abort(), unknown routes, wrong methods) keep their status codes
    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return error_response(err.description, err.code or 500)

    # 500 Internal Error (catch-all)
    @app.errorhandler(Exception)
    def internal_error(err: Exception):
        storage.rollback()
        current_app.logger.exception("Unhandled exception", exc_info=err)
        return error_response("An unexpected error occurred", 500)
