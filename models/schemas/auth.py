from marshmallow import EXCLUDE, Schema, fields


class _RequestSchema(Schema):
    class Meta:
        unknown = EXCLUDE


class RegisterSchema(_RequestSchema):
    # Presence/format/length rules live in AuthService.register
    email = fields.String(required=True, error_messages={"required": "email is required."})
    password = fields.String(required=True, load_only=True, error_messages={"required": "password is required."})
    name = fields.String(required=True, error_messages={"required": "name is required."})


class LoginSchema(_RequestSchema):
    email = fields.String(required=True, error_messages={"required": "email is required."})
    password = fields.String(required=True, load_only=True, error_messages={"required": "password is required."})


class RefreshTokenSchema(_RequestSchema):
    refresh_token = fields.String(required=True, error_messages={"required": "refresh_token is required."})


class RegisteredOutSchema(Schema):
    success = fields.Constant(True)
    message = fields.Constant("User registered successfully")
    userId = fields.String(attribute="id")
    email = fields.String()
    name = fields.String()
