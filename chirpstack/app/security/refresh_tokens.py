"""
security/refresh_tokens.py — refresh token lifecycle.

  - generate: 32 cryptographically random bytes, hex encoded (64 chars).
  - store:    persists the SHA-256 digest of the token, never the raw value,
              so a leaked database does not leak usable tokens. The raw token
              is returned to the client once.
  - resolve:  unknown, revoked and expired tokens all raise the same
              REFRESH_TOKEN_INVALID error with the same message.
  - revoke:   idempotent for tokens that exist.

Store failures (SQLAlchemyError) are not caught here; they reach the global
handler unmodified. Nothing is retried.
"""

from __future__ import annotations

import hashlib
import secrets
import uuid
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from chirpstack.app.crud import refresh_token as refresh_token_crud
from chirpstack.app.errors import AppError, ErrorCode
from chirpstack.app.models.refresh_token import RefreshToken

TOKEN_BYTES = 32


def _hash_token(raw_token: str) -> str:
    """SHA-256 hex digest of a raw token string. Used for refresh token storage."""
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


def _invalid_refresh_token() -> AppError:
    return AppError(
        ErrorCode.REFRESH_TOKEN_INVALID,
        "The refresh token is invalid, expired, or has been revoked.",
        401,
    )


def generate_refresh_token() -> str:
    return secrets.token_hex(TOKEN_BYTES)


def store_refresh_token(
        raw_token: str,
        user_id: uuid.UUID,
        ttl: timedelta,
        session: Session,
) -> RefreshToken:
    expires_at = datetime.now(timezone.utc) + ttl
    return refresh_token_crud.store_refresh_token(
        session,
        token_hash=_hash_token(raw_token),
        user_id=user_id,
        expires_at=expires_at,
    )


def resolve_refresh_token(raw_token: str, session: Session) -> uuid.UUID:
    """
    Returns the id of the user owning a live refresh token.

    Raises:
      AppError(REFRESH_TOKEN_INVALID, 401) — not found, revoked, or expired.
    """
    user = refresh_token_crud.get_user_from_refresh_token(session, _hash_token(raw_token))
    if user is None:
        raise _invalid_refresh_token()
    return user.id


def revoke_refresh_token(raw_token: str, session: Session) -> None:
    """
    Marks a refresh token revoked. Revoking an already-revoked token succeeds.

    Raises:
      AppError(REFRESH_TOKEN_INVALID, 401) — the token was never issued.
    """
    record = refresh_token_crud.revoke_refresh_token(session, _hash_token(raw_token))
    if record is None:
        raise _invalid_refresh_token()
