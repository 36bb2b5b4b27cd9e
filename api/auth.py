"""
Authentication blueprint (OAuth2-style password grant):
- POST /register
- POST /token
- POST /refresh
- POST /revoke

The implementation:
- Request bodies are validated by marshmallow schemas, business rules by AuthService
- Access tokens are short-lived JWTs (HS256), verified without a lookup
- Refresh tokens are opaque random strings stored in the DB so they can be revoked
"""
from __future__ import annotations

from flask import Blueprint, request

from api.formatters import format_response
from models.schemas.auth import (
    LoginSchema,
    RefreshTokenSchema,
    RegisteredOutSchema,
    RegisterSchema,
)
from utils.decorators import current_auth_service

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_token_schema = RefreshTokenSchema()
registered_out_schema = RegisteredOutSchema()


@bp.post("/register")
def register():
    """
    Register a new account.
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          required: [email, password, name]
          properties:
            email: { type: string }
            password: { type: string, minLength: 8 }
            name: { type: string }
    responses:
      201:
        description: Created
      400:
        description: Missing or invalid fields
      409:
        description: Email already registered
    """
    payload = request.get_json(silent=True) or {}
    data = register_schema.load(payload)

    user = current_auth_service().register(data["email"], data["password"], data["name"])
    return format_response(registered_out_schema.dump(user), 201)


@bp.post("/token")
def token():
    """
    Login: exchange email and password for an access token and a refresh token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           required: [email, password]
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns tokens)
      400:
        description: Missing fields
      401:
        description: Invalid email or password
    """
    payload = request.get_json(silent=True) or {}
    data = login_schema.load(payload)

    grant = current_auth_service().login(data["email"], data["password"])
    return format_response({"success": True, **grant.to_dict()}, 200)


@bp.post("/refresh")
def refresh():
    """
    Use a refresh token to obtain a new access token (the refresh token stays valid)
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           required: [refresh_token]
           properties:
             refresh_token: { type: string }
    responses:
      200:
        description: OK (returns a new access token)
      400:
        description: Missing refresh_token
      401:
        description: Invalid or expired refresh token
    """
    payload = request.get_json(silent=True) or {}
    data = refresh_token_schema.load(payload)

    grant = current_auth_service().refresh(data["refresh_token"])
    return format_response({"success": True, **grant.to_dict()}, 200)


@bp.post("/revoke")
def revoke():
    """
    Logout: revoke a refresh token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           required: [refresh_token]
           properties:
             refresh_token: { type: string }
    responses:
      200:
        description: Token revoked
      400:
        description: Missing refresh_token
      404:
        description: Refresh token not found (also on repeated revocation)
    """
    payload = request.get_json(silent=True) or {}
    data = refresh_token_schema.load(payload)

    current_auth_service().revoke(data["refresh_token"])
    return format_response({"success": True, "message": "Token revoked successfully"}, 200)
