"""
routes/fileserver.py — static site under /app.

Every request through this blueprint bumps the process-wide hit counter shown
on /admin/metrics and is served with Cache-Control: no-cache.
"""

from __future__ import annotations

from flask import Blueprint, current_app, send_from_directory

from chirpstack.app.extensions import fileserver_hits

fileserver_bp = Blueprint("fileserver", __name__)


@fileserver_bp.before_request
def count_hit():
    fileserver_hits.increment()


@fileserver_bp.after_request
def disable_caching(response):
    response.headers["Cache-Control"] = "no-cache"
    return response


@fileserver_bp.route("/", methods=["GET"])
def serve_index():
    """GET /app/ — FILESERVER_ROOT/index.html."""
    return send_from_directory(current_app.config["FILESERVER_ROOT"], "index.html")


@fileserver_bp.route("/<path:filename>", methods=["GET"])
def serve(filename: str):
    """GET /app/<path> — files from FILESERVER_ROOT."""
    return send_from_directory(current_app.config["FILESERVER_ROOT"], filename)
