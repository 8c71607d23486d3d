"""
routes/admin.py — admin and health route handlers.

Endpoints:
  GET    /admin/metrics → 200  HTML page with the /app hit count
  POST   /admin/reset   → 200  dev only: zero the counter, delete all users
  GET    /api/healthz   → 200  "OK"
"""

from __future__ import annotations

from flask import Blueprint, current_app

from chirpstack.app.extensions import db, fileserver_hits
from chirpstack.app.services import admin_service

admin_bp = Blueprint("admin", __name__)
health_bp = Blueprint("health", __name__)

_TEXT_PLAIN = {"Content-Type": "text/plain; charset=utf-8"}


@admin_bp.route("/metrics", methods=["GET"])
def metrics():
    """GET /admin/metrics"""
    page = admin_service.render_metrics(fileserver_hits)
    return page, 200, {"Content-Type": "text/html; charset=utf-8"}


@admin_bp.route("/reset", methods=["POST"])
def reset():
    """POST /admin/reset — Destructive; refused unless PLATFORM=dev."""
    admin_service.reset_environment(
        platform=current_app.config["PLATFORM"],
        hits=fileserver_hits,
        session=db.session,
    )
    db.session.commit()
    current_app.logger.warning("Environment reset: hit counter zeroed, all users deleted")
    return "OK", 200, _TEXT_PLAIN


@health_bp.route("/healthz", methods=["GET"])
def healthz():
    """GET /api/healthz"""
    return "OK", 200, _TEXT_PLAIN
