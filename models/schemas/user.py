from marshmallow import EXCLUDE, Schema, fields

PREFERENCES_NOT_OBJECT = "preferences must be an object"


class ProfileUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.String()
    bio = fields.String()
    preferences = fields.Dict(
        keys=fields.String(),
        error_messages={"invalid": PREFERENCES_NOT_OBJECT, "null": PREFERENCES_NOT_OBJECT},
    )


class ProfileOutSchema(Schema):
    id = fields.String()
    email = fields.String()
    name = fields.String()
    bio = fields.String()
    preferences = fields.Method("get_preferences")
    createdAt = fields.DateTime(attribute="created_at")
    updatedAt = fields.DateTime(attribute="updated_at")

    def get_preferences(self, obj):
        return obj.preferences if isinstance(obj.preferences, dict) else {}
