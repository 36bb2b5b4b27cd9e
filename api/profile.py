from __future__ import annotations

from flask import Blueprint, request, g, abort

from api.formatters import format_response
from models import storage
from models.user import User
from models.schemas.user import ProfileOutSchema, ProfileUpdateSchema
from utils.decorators import jwt_required

bp = Blueprint("profile", __name__)

profile_out_schema = ProfileOutSchema()
profile_update_schema = ProfileUpdateSchema()


def _current_user() -> User:
    user = storage.get(User, g.current_user_id)
    if not user:
        abort(404, description="User not found")
    return user


@bp.get("/profile")
@jwt_required()
def get_profile():
    """
    Get the authenticated account's profile
    ---
    tags:
      - Profile
    security:
      - Bearer: []
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
      404:
        description: User not found
    """
    return format_response(profile_out_schema.dump(_current_user()), 200)


@bp.put("/profile")
@jwt_required()
def update_profile():
    """
    Update name, bio and/or preferences of the authenticated account
    ---
    tags:
      - Profile
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            name: { type: string }
            bio: { type: string }
            preferences: { type: object }
    responses:
      200:
        description: Updated
      400:
        description: preferences must be an object
      401:
        description: Unauthorized
    """
    payload = request.get_json(silent=True) or {}
    data = profile_update_schema.load(payload)

    user = _current_user()
    for field in ["name", "bio", "preferences"]:
        if field in data:
            setattr(user, field, data[field])
    user.touch()

    storage.new(user)
    storage.save()
    return format_response(
        {
            "success": True,
            "message": "Profile updated successfully",
            "profile": profile_out_schema.dump(user),
        },
        200,
    )
