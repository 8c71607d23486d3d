"""
services/auth_service.py — login and session (refresh token) lifecycle.

Responsibilities:
  - Credential validation (security/passwords.py)
  - Access token issuance (security/tokens.py)
  - Refresh token issuance, resolution, revocation (security/refresh_tokens.py)

Layer rules:
  - No imports from routes or schemas
  - No use of flask.request, flask.g, or HTTP status codes
  - current_app.config is used ONLY to read JWT_SECRET_KEY and token
    lifetimes, so secrets are never read from env directly in a way that
    bypasses Flask config validation. The security/ modules underneath take
    them as plain arguments.

Token design:
  - Access token: JWT, HS256, default 1 h, clamped to JWT_ACCESS_TOKEN_MAX_EXPIRES.
  - Refresh token: random hex string, stored as SHA-256 digest, 60 days.
    Not rotated on use; revoked explicitly via POST /api/revoke.
"""

from __future__ import annotations

from flask import current_app
from sqlalchemy.orm import Session

from chirpstack.app.crud import user as user_crud
from chirpstack.app.security import refresh_tokens
from chirpstack.app.security.passwords import check_password_hash, invalid_credentials
from chirpstack.app.security.tokens import issue_access_token, resolve_token_ttl


def _create_access_token(user_id, expires_in_seconds: int | None = None) -> str:
    config = current_app.config
    ceiling = config["JWT_ACCESS_TOKEN_MAX_EXPIRES"]
    ttl = resolve_token_ttl(
        expires_in_seconds,
        default=config["JWT_ACCESS_TOKEN_EXPIRES"],
        ceiling=ceiling,
    )
    return issue_access_token(
        user_id,
        config["JWT_SECRET_KEY"],
        ttl,
        max_ttl=ceiling,
    )


def login_user(
        email: str,
        password: str,
        session: Session,
        expires_in_seconds: int | None = None,
) -> dict:
    """
    Validates credentials and issues an access token plus a stored refresh token.

    Raises:
      AppError(INVALID_CREDENTIALS, 401) — email not found or password wrong.
      Uses the same error for both to avoid email enumeration.
      AppError(MALFORMED_HASH, 500)      — stored hash is corrupt.

    Returns: {"user": User, "token": "...", "refresh_token": "..."}
    """
    user = user_crud.get_user_by_email(session, email)
    if user is None:
        raise invalid_credentials()

    check_password_hash(password, user.password_hash)

    raw_refresh_token = refresh_tokens.generate_refresh_token()
    refresh_tokens.store_refresh_token(
        raw_refresh_token,
        user.id,
        current_app.config["JWT_REFRESH_TOKEN_EXPIRES"],
        session,
    )

    return {
        "user": user,
        "token": _create_access_token(user.id, expires_in_seconds),
        "refresh_token": raw_refresh_token,
    }


def refresh_access_token(raw_refresh_token: str, session: Session) -> dict:
    """
    Exchanges a live refresh token for a new access token.

    Raises:
      AppError(REFRESH_TOKEN_INVALID, 401) — not found, revoked, or expired.

    Returns: {"token": "..."}
    """
    user_id = refresh_tokens.resolve_refresh_token(raw_refresh_token, session)
    return {"token": _create_access_token(user_id)}


def revoke_session(raw_refresh_token: str, session: Session) -> None:
    """
    Revokes a refresh token. Future refreshes with it fail with
    REFRESH_TOKEN_INVALID. Access tokens already issued stay valid until they
    expire (they are never stored).

    Raises:
      AppError(REFRESH_TOKEN_INVALID, 401) — token was never issued.
    """
    refresh_tokens.revoke_refresh_token(raw_refresh_token, session)
