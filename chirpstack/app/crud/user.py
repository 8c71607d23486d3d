"""
crud/user.py — store operations for users.

Thin wrappers over SQLAlchemy statements. They flush so generated ids and
defaults are populated; committing is the route's job. No AppError here:
"not found" is a None return and the caller decides what it means.
"""

from __future__ import annotations

import uuid

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from chirpstack.app.models.chirp import Chirp
from chirpstack.app.models.refresh_token import RefreshToken
from chirpstack.app.models.user import User


def get_user_by_email(session: Session, email: str) -> User | None:
    return session.execute(
        select(User).where(User.email == email)
    ).scalar_one_or_none()


def get_user_by_id(session: Session, user_id: uuid.UUID) -> User | None:
    return session.get(User, user_id)


def create_user(session: Session, email: str, password_hash: str) -> User:
    user = User(email=email, password_hash=password_hash)
    session.add(user)
    session.flush()
    return user


def update_user(
        session: Session,
        user_id: uuid.UUID,
        email: str,
        password_hash: str,
) -> User | None:
    user = session.get(User, user_id)
    if user is None:
        return None
    user.email = email
    user.password_hash = password_hash
    session.flush()
    return user


def upgrade_user(session: Session, user_id: uuid.UUID) -> User | None:
    """Marks the user as a Chirpy Red member. Returns None if there is no such user."""
    user = session.get(User, user_id)
    if user is None:
        return None
    user.is_chirpy_red = True
    session.flush()
    return user


def truncate_users(session: Session) -> None:
    """Deletes every user together with their chirps and refresh tokens."""
    # Bulk deletes bypass ORM cascades; children go first.
    session.execute(delete(Chirp))
    session.execute(delete(RefreshToken))
    session.execute(delete(User))
    session.flush()
