"""
routes/webhooks.py — payment provider callbacks.

Endpoints (url_prefix=/api/polka):
  POST   /webhooks → 204  user.upgraded grants Chirpy Red; other events ignored
"""

from __future__ import annotations

from flask import Blueprint, current_app, request

from chirpstack.app.extensions import db
from chirpstack.app.schemas.webhook_schema import USER_UPGRADED, PolkaWebhookSchema
from chirpstack.app.services import user_service

webhooks_bp = Blueprint("webhooks", __name__)


@webhooks_bp.route("/webhooks", methods=["POST"])
def polka_webhook():
    """POST /api/polka/webhooks"""
    data = PolkaWebhookSchema().load(request.get_json(force=True) or {})
    if data["event"] != USER_UPGRADED:
        current_app.logger.info("Ignoring webhook event %r", data["event"])
        return "", 204

    user_service.upgrade_user(user_id=data["data"]["user_id"], session=db.session)
    db.session.commit()
    return "", 204
