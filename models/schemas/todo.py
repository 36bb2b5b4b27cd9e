from marshmallow import EXCLUDE, Schema, fields, validate

TITLE_REQUIRED = "Missing required field: title"


class TodoCreateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.String(
        required=True,
        validate=[validate.Length(min=1, error=TITLE_REQUIRED), validate.Length(max=255)],
        error_messages={"required": TITLE_REQUIRED, "null": TITLE_REQUIRED},
    )
    description = fields.String(load_default="", allow_none=True)
    completed = fields.Boolean(load_default=False)


class TodoUpdateSchema(Schema):
    # All optional, but validate if present
    class Meta:
        unknown = EXCLUDE

    title = fields.String(validate=validate.Length(max=255))
    description = fields.String()
    completed = fields.Boolean()


class TodoOutSchema(Schema):
    id = fields.String()
    userId = fields.String(attribute="user_id")
    title = fields.String()
    description = fields.String()
    completed = fields.Boolean()
    createdAt = fields.DateTime(attribute="created_at")
    updatedAt = fields.DateTime(attribute="updated_at")
