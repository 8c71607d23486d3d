"""
routes/chirps.py — chirp route handlers.

Registered at url_prefix=/api because this blueprint owns both /chirps and
/validate_chirp.

Endpoints:
  POST   /validate_chirp     → 200  moderation dry run (no auth)
  POST   /chirps             → 201  create (access token)
  GET    /chirps             → 200  list; ?author_id=<uuid>&sort=asc|desc
  GET    /chirps/<uuid:id>   → 200  get
  DELETE /chirps/<uuid:id>   → 204  delete (access token + author only)
"""

from __future__ import annotations

import uuid

from flask import Blueprint, g, jsonify, request

from chirpstack.app.extensions import db
from chirpstack.app.middleware.auth_middleware import require_auth
from chirpstack.app.schemas.chirp_schema import (
    ChirpBodySchema,
    ChirpListQuerySchema,
    ChirpOutSchema,
    ValidateChirpOutSchema,
)
from chirpstack.app.services import chirp_service

chirps_bp = Blueprint("chirps", __name__)


@chirps_bp.route("/validate_chirp", methods=["POST"])
def validate_chirp():
    """POST /api/validate_chirp — Length check + profanity filter, nothing stored."""
    data = ChirpBodySchema().load(request.get_json(force=True) or {})
    result = chirp_service.validate_chirp(data["body"])
    return jsonify({"data": ValidateChirpOutSchema().dump(result)}), 200


@chirps_bp.route("/chirps", methods=["POST"])
@require_auth
def create_chirp():
    """POST /api/chirps — Post a chirp as the authenticated user."""
    data = ChirpBodySchema().load(request.get_json(force=True) or {})
    chirp = chirp_service.create_chirp(
        body=data["body"],
        author_id=g.user_id,
        session=db.session,
    )
    db.session.commit()
    return jsonify({"data": ChirpOutSchema().dump(chirp)}), 201


@chirps_bp.route("/chirps", methods=["GET"])
def list_chirps():
    """GET /api/chirps — All chirps, oldest first unless sort=desc."""
    query = ChirpListQuerySchema().load(request.args.to_dict())
    chirps = chirp_service.list_chirps(
        session=db.session,
        author_id=query["author_id"],
        newest_first=query["sort"] == "desc",
    )
    return jsonify({"data": ChirpOutSchema(many=True).dump(chirps)}), 200


@chirps_bp.route("/chirps/<uuid:chirp_id>", methods=["GET"])
def get_chirp(chirp_id: uuid.UUID):
    """GET /api/chirps/:id"""
    chirp = chirp_service.get_chirp(chirp_id=chirp_id, session=db.session)
    return jsonify({"data": ChirpOutSchema().dump(chirp)}), 200


@chirps_bp.route("/chirps/<uuid:chirp_id>", methods=["DELETE"])
@require_auth
def delete_chirp(chirp_id: uuid.UUID):
    """
    DELETE /api/chirps/:id

    401 when the caller is not authenticated, 403 when authenticated but not
    the author, 404 when the chirp does not exist.
    """
    chirp_service.delete_chirp(
        chirp_id=chirp_id,
        caller_id=g.user_id,
        session=db.session,
    )
    db.session.commit()
    return "", 204
