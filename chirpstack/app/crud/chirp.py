"""
crud/chirp.py — store operations for chirps.
"""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.orm import Session

from chirpstack.app.models.chirp import Chirp


def create_chirp(session: Session, body: str, user_id: uuid.UUID) -> Chirp:
    chirp = Chirp(body=body, user_id=user_id)
    session.add(chirp)
    session.flush()
    return chirp


def get_chirps(session: Session, newest_first: bool = False) -> list[Chirp]:
    order = Chirp.created_at.desc() if newest_first else Chirp.created_at.asc()
    return list(session.execute(select(Chirp).order_by(order)).scalars().all())


def get_chirps_by_author(
        session: Session,
        user_id: uuid.UUID,
        newest_first: bool = False,
) -> list[Chirp]:
    order = Chirp.created_at.desc() if newest_first else Chirp.created_at.asc()
    stmt = select(Chirp).where(Chirp.user_id == user_id).order_by(order)
    return list(session.execute(stmt).scalars().all())


def get_chirp_by_id(session: Session, chirp_id: uuid.UUID) -> Chirp | None:
    return session.get(Chirp, chirp_id)


def delete_chirp(session: Session, chirp: Chirp) -> None:
    session.delete(chirp)
    session.flush()
