"""
schemas/chirp_schema.py — Marshmallow schemas for chirp endpoints.

The 140-character limit applies to the body as submitted. Profanity
filtering only ever shortens a body, so the stored body fits as well.
The length error carries the registered CHIRP_TOO_LONG code as its message;
the global ValidationError handler turns it into that error code.
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from chirpstack.app.errors import ErrorCode
from chirpstack.app.extensions import ma
from chirpstack.app.models.chirp import MAX_CHIRP_LENGTH


class ChirpBodySchema(Schema):
    """POST /api/chirps and POST /api/validate_chirp"""

    class Meta:
        unknown = EXCLUDE

    body = fields.String(
        required=True,
        validate=validate.Length(max=MAX_CHIRP_LENGTH, error=ErrorCode.CHIRP_TOO_LONG),
    )


class ChirpListQuerySchema(Schema):
    """GET /api/chirps?author_id=<uuid>&sort=asc|desc"""

    class Meta:
        unknown = EXCLUDE

    author_id = fields.UUID(load_default=None)
    sort = fields.String(
        load_default="asc",
        validate=validate.OneOf(["asc", "desc"]),
    )


# ── Response schemas ───────────────────────────────────────────────────────

class ChirpOutSchema(ma.Schema):
    id = fields.UUID()
    body = fields.String()
    user_id = fields.UUID()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class ValidateChirpOutSchema(ma.Schema):
    """Exactly one of the two keys is present, as in {"valid": true} / {"cleaned_body": "..."}."""

    valid = fields.Boolean()
    cleaned_body = fields.String()
