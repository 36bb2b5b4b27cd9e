from __future__ import annotations
from functools import wraps
from flask import request, g, current_app, abort
from models import storage
from utils.auth_service import AuthService
from utils.security import is_valid_uuid


def current_auth_service() -> AuthService:
    """AuthService bound to the app's settings/hasher and this request's DB session."""
    return AuthService(
        current_app.extensions["auth_settings"],
        storage.get_session(),
        hasher=current_app.extensions["credential_hasher"],
    )


def jwt_required():
    """
    Resolve the caller from the Bearer access token (raises AuthenticationError -> 401).
    Handlers read the identity from g.current_user_id / g.current_user_email only.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            identity = current_auth_service().authenticate(request.headers.get("Authorization"))
            g.current_user_id = identity.account_id
            g.current_user_email = identity.email
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def valid_uuid_param(name: str, message: str):
    """
    Reject a malformed UUID path parameter with 400 before the handler looks anything up.
    Apply below jwt_required so unauthenticated calls still get 401 first.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if not is_valid_uuid(kwargs.get(name, "")):
                abort(400, description=message)
            return fn(*args, **kwargs)

        return wrapper

    return decorator
