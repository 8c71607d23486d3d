"""
services/admin_service.py — metrics page and development reset.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from chirpstack.app.crud import user as user_crud
from chirpstack.app.errors import AppError, ErrorCode
from chirpstack.app.metrics import HitCounter
from chirpstack.config import Platform

METRICS_TEMPLATE = """<html>
  <body>
    <h1>Welcome, Chirpy Admin</h1>
    <p>Chirpy has been visited {hits} times!</p>
  </body>
</html>
"""


def render_metrics(hits: HitCounter) -> str:
    return METRICS_TEMPLATE.format(hits=hits.value)


def reset_environment(platform: Platform, hits: HitCounter, session: Session) -> None:
    """
    Zeroes the hit counter and deletes every user (with their chirps and
    refresh tokens).

    Raises:
      AppError(FORBIDDEN, 403) — platform is not dev.
    """
    if platform != Platform.DEV:
        raise AppError(
            ErrorCode.FORBIDDEN,
            "Operation not allowed.",
            403,
        )
    hits.reset()
    user_crud.truncate_users(session)
