"""
routes/users.py — account route handlers.

Endpoints (url_prefix=/api/users):
  POST   ""   → 201  create account       (no auth)
  PUT    ""   → 200  update email/password (access token)
"""

from __future__ import annotations

from flask import Blueprint, current_app, g, jsonify, request

from chirpstack.app.extensions import db
from chirpstack.app.middleware.auth_middleware import require_auth
from chirpstack.app.schemas.user_schema import UserCredentialsSchema, UserOutSchema
from chirpstack.app.services import user_service

users_bp = Blueprint("users", __name__)


@users_bp.route("", methods=["POST"])
def create_user():
    """POST /api/users — Create account."""
    data = UserCredentialsSchema().load(request.get_json(force=True) or {})
    user = user_service.create_user(
        email=data["email"],
        password=data["password"],
        rounds=current_app.config["BCRYPT_LOG_ROUNDS"],
        session=db.session,
    )
    db.session.commit()
    return jsonify({"data": UserOutSchema().dump(user)}), 201


@users_bp.route("", methods=["PUT"])
@require_auth
def update_user():
    """PUT /api/users — Replace the caller's email and password."""
    data = UserCredentialsSchema().load(request.get_json(force=True) or {})
    user = user_service.update_user(
        user_id=g.user_id,
        email=data["email"],
        password=data["password"],
        rounds=current_app.config["BCRYPT_LOG_ROUNDS"],
        session=db.session,
    )
    db.session.commit()
    return jsonify({"data": UserOutSchema().dump(user)}), 200
