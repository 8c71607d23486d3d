"""
schemas/webhook_schema.py — payment provider (Polka) webhook payload.

    {"event": "user.upgraded", "data": {"user_id": "<uuid>"}}

Only "user.upgraded" has an effect; other events are accepted and ignored,
so data.user_id is only required when it is needed.
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, ValidationError, fields, validates_schema

USER_UPGRADED = "user.upgraded"


class WebhookDataSchema(Schema):

    class Meta:
        unknown = EXCLUDE

    user_id = fields.UUID(load_default=None)


class PolkaWebhookSchema(Schema):
    """POST /api/polka/webhooks"""

    class Meta:
        unknown = EXCLUDE

    event = fields.String(required=True)
    data = fields.Nested(WebhookDataSchema, load_default=dict)

    @validates_schema
    def require_user_for_upgrade(self, data, **kwargs) -> None:
        if data["event"] == USER_UPGRADED and not data["data"].get("user_id"):
            raise ValidationError("Missing data for required field.", "data")
