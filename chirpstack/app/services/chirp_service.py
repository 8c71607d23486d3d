"""
services/chirp_service.py — chirp business logic.

Authorization rules:
  - Create: any authenticated user; the chirp is owned by the caller.
  - List / Get: public.
  - Delete: only the author (security/guard.py → FORBIDDEN 403).

Layer rules:
  - No Flask imports. Receives plain values, returns ORM objects or raises AppError.
  - Commits are the route's responsibility — only flush here.
"""

from __future__ import annotations

import uuid

from sqlalchemy.orm import Session

from chirpstack.app.crud import chirp as chirp_crud
from chirpstack.app.errors import AppError, ErrorCode
from chirpstack.app.models.chirp import Chirp
from chirpstack.app.security.guard import require_owner
from chirpstack.app.services.profanity import remove_profanity


def _get_chirp_or_404(chirp_id: uuid.UUID, session: Session) -> Chirp:
    chirp = chirp_crud.get_chirp_by_id(session, chirp_id)
    if chirp is None:
        raise AppError(
            ErrorCode.CHIRP_NOT_FOUND,
            f"Chirp {chirp_id} does not exist.",
            404,
        )
    return chirp


def validate_chirp(body: str) -> dict:
    """
    Dry run of the moderation step. Length is already checked by the schema.

    Returns {"valid": True} for a clean body, {"cleaned_body": "..."} otherwise.
    """
    cleaned, changed = remove_profanity(body)
    if changed:
        return {"cleaned_body": cleaned}
    return {"valid": True}


def create_chirp(body: str, author_id: uuid.UUID, session: Session) -> Chirp:
    cleaned, _ = remove_profanity(body)
    return chirp_crud.create_chirp(session, body=cleaned, user_id=author_id)


def list_chirps(
        session: Session,
        author_id: uuid.UUID | None = None,
        newest_first: bool = False,
) -> list[Chirp]:
    if author_id is not None:
        return chirp_crud.get_chirps_by_author(session, author_id, newest_first=newest_first)
    return chirp_crud.get_chirps(session, newest_first=newest_first)


def get_chirp(chirp_id: uuid.UUID, session: Session) -> Chirp:
    return _get_chirp_or_404(chirp_id, session)


def delete_chirp(chirp_id: uuid.UUID, caller_id: uuid.UUID, session: Session) -> None:
    """
    Raises:
      AppError(CHIRP_NOT_FOUND, 404)
      AppError(FORBIDDEN, 403) — caller is not the author.
    """
    chirp = _get_chirp_or_404(chirp_id, session)
    require_owner(chirp.user_id, caller_id, "Only the author may delete this chirp.")
    chirp_crud.delete_chirp(session, chirp)
