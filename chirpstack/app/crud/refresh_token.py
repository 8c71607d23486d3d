"""
crud/refresh_token.py — store operations for refresh tokens.

All lookups are by token_hash; hashing the raw token is the caller's job
(security/refresh_tokens.py).
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.orm import Session

from chirpstack.app.models.refresh_token import RefreshToken
from chirpstack.app.models.user import User


def store_refresh_token(
        session: Session,
        token_hash: str,
        user_id: uuid.UUID,
        expires_at: datetime,
) -> RefreshToken:
    record = RefreshToken(
        token_hash=token_hash,
        user_id=user_id,
        expires_at=expires_at,
    )
    session.add(record)
    session.flush()
    return record


def get_user_from_refresh_token(session: Session, token_hash: str) -> User | None:
    """
    Returns the owner of a live refresh token.

    None for unknown, revoked and expired tokens alike; the three cases are
    indistinguishable to the caller.
    """
    now = datetime.now(timezone.utc)
    return session.execute(
        select(User)
        .join(RefreshToken, RefreshToken.user_id == User.id)
        .where(
            RefreshToken.token_hash == token_hash,
            RefreshToken.revoked_at.is_(None),
            RefreshToken.expires_at > now,
        )
    ).scalar_one_or_none()


def revoke_refresh_token(session: Session, token_hash: str) -> RefreshToken | None:
    """
    Sets revoked_at on the token. Already-revoked tokens keep their original
    revoked_at. Returns None if the token never existed.
    """
    record = session.execute(
        select(RefreshToken).where(RefreshToken.token_hash == token_hash)
    ).scalar_one_or_none()
    if record is None:
        return None
    if record.revoked_at is None:
        record.revoked_at = datetime.now(timezone.utc)
        session.flush()
    return record
