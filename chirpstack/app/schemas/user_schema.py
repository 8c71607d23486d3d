"""
schemas/user_schema.py — Marshmallow schemas for the user and login endpoints.

Validation responsibility:
  - This file: field types, presence, email format.
  - security/passwords.py: the 72-byte bcrypt limit (PASSWORD_TOO_LONG).
  - services/user_service.py: DUPLICATE_EMAIL (requires a DB lookup).

IMPORTANT: request schemas inherit from marshmallow.Schema directly.
           Only the response schemas use ma.Schema (see extensions.py).
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, post_dump, validate

from chirpstack.app.extensions import ma


class UserCredentialsSchema(Schema):
    """
    POST /api/users and PUT /api/users

    No complexity policy; the only length rule is bcrypt's, checked when
    the password is hashed.
    """

    class Meta:
        unknown = EXCLUDE

    email = fields.Email(
        required=True,
        validate=validate.Length(max=255),
    )
    password = fields.String(
        required=True,
        load_only=True,
        validate=validate.Length(min=1, error="Password must not be empty."),
    )


class LoginSchema(UserCredentialsSchema):
    """
    POST /api/login

    expires_in_seconds is optional; missing, zero or negative means the
    configured default, and anything above JWT_ACCESS_TOKEN_MAX_EXPIRES is
    clamped to it (security/tokens.resolve_token_ttl).
    """

    expires_in_seconds = fields.Integer(load_default=None)


# ── Response schemas ───────────────────────────────────────────────────────

class UserOutSchema(ma.Schema):
    id = fields.UUID()
    email = fields.String()
    is_chirpy_red = fields.Boolean()
    created_at = fields.DateTime()
    updated_at = fields.DateTime()


class LoginOutSchema(ma.Schema):
    """User fields flattened next to the issued token pair."""

    user = fields.Nested(UserOutSchema)
    token = fields.String()
    refresh_token = fields.String()

    @post_dump
    def flatten_user(self, data, **kwargs):
        user = data.pop("user", {})
        return {**user, **data}


class AccessTokenOutSchema(ma.Schema):
    token = fields.String()
