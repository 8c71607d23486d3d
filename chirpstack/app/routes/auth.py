"""
routes/auth.py — login and session route handlers.

Layer rules:
  - Parse request body / headers
  - Validate with the appropriate schema (raises ValidationError on bad input)
  - Call exactly ONE service function
  - Commit the DB session
  - Return the standard response envelope: {"data": {...}}

AppError propagates to the global error handler in app/__init__.py — routes
never catch it.

Endpoints (url_prefix=/api):
  POST   /login    → 200  user + access token + refresh token
  POST   /refresh  → 200  new access token   (refresh token as Bearer)
  POST   /revoke   → 204                      (refresh token as Bearer)
"""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from chirpstack.app.extensions import db
from chirpstack.app.middleware.auth_middleware import get_bearer_token
from chirpstack.app.schemas.user_schema import AccessTokenOutSchema, LoginOutSchema, LoginSchema
from chirpstack.app.services import auth_service

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/login", methods=["POST"])
def login():
    """POST /api/login — Authenticate; return access + refresh tokens."""
    data = LoginSchema().load(request.get_json(force=True) or {})
    result = auth_service.login_user(
        email=data["email"],
        password=data["password"],
        session=db.session,
        expires_in_seconds=data["expires_in_seconds"],
    )
    db.session.commit()
    return jsonify({"data": LoginOutSchema().dump(result)}), 200


@auth_bp.route("/refresh", methods=["POST"])
def refresh():
    """POST /api/refresh — Exchange the Bearer refresh token for a new access token."""
    raw_refresh_token = get_bearer_token(request.headers)
    result = auth_service.refresh_access_token(
        raw_refresh_token=raw_refresh_token,
        session=db.session,
    )
    return jsonify({"data": AccessTokenOutSchema().dump(result)}), 200


@auth_bp.route("/revoke", methods=["POST"])
def revoke():
    """POST /api/revoke — Revoke the Bearer refresh token."""
    raw_refresh_token = get_bearer_token(request.headers)
    auth_service.revoke_session(
        raw_refresh_token=raw_refresh_token,
        session=db.session,
    )
    db.session.commit()
    return "", 204
