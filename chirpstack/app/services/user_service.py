"""
services/user_service.py — account creation, profile update, Chirpy Red upgrade.

Layer rules:
  - No use of flask.request, flask.g, or HTTP knowledge beyond AppError codes.
  - Receives plain values (user_id, email, password, bcrypt rounds) and a
    Session; returns ORM objects or raises AppError.
  - Commits are the route's responsibility — only flush here.

Password storage:
  - Hashed with bcrypt via security/passwords.py; cost passed in by the route
    from BCRYPT_LOG_ROUNDS.
  - Raw password is never stored, never logged.
"""

from __future__ import annotations

import uuid

from sqlalchemy.orm import Session

from chirpstack.app.crud import user as user_crud
from chirpstack.app.errors import AppError, ErrorCode
from chirpstack.app.models.user import User
from chirpstack.app.security.passwords import hash_password


def _ensure_email_available(
        email: str,
        session: Session,
        current_user_id: uuid.UUID | None = None,
) -> None:
    existing = user_crud.get_user_by_email(session, email)
    if existing is not None and existing.id != current_user_id:
        raise AppError(
            ErrorCode.DUPLICATE_EMAIL,
            f"The email address '{email}' is already registered.",
            409,
            field="email",
        )


def _user_not_found(user_id: uuid.UUID) -> AppError:
    return AppError(
        ErrorCode.USER_NOT_FOUND,
        f"User {user_id} not found.",
        404,
    )


def create_user(email: str, password: str, rounds: int, session: Session) -> User:
    """
    Creates a new account.

    Raises:
      AppError(PASSWORD_TOO_LONG, 400) — password over 72 bytes.
      AppError(DUPLICATE_EMAIL, 409)   — email already registered.
    """
    password_hash = hash_password(password, rounds=rounds)
    _ensure_email_available(email, session)
    return user_crud.create_user(session, email=email, password_hash=password_hash)


def update_user(
        user_id: uuid.UUID,
        email: str,
        password: str,
        rounds: int,
        session: Session,
) -> User:
    """
    Replaces the authenticated user's email and password.

    Raises:
      AppError(PASSWORD_TOO_LONG, 400)
      AppError(DUPLICATE_EMAIL, 409) — email belongs to another account.
      AppError(USER_NOT_FOUND, 404)  — user deleted after the token was issued.
    """
    password_hash = hash_password(password, rounds=rounds)
    _ensure_email_available(email, session, current_user_id=user_id)

    user = user_crud.update_user(session, user_id, email=email, password_hash=password_hash)
    if user is None:
        raise _user_not_found(user_id)
    return user


def upgrade_user(user_id: uuid.UUID, session: Session) -> User:
    """
    Grants Chirpy Red. Upgrading an already upgraded user is a no-op.

    Raises:
      AppError(USER_NOT_FOUND, 404)
    """
    user = user_crud.upgrade_user(session, user_id)
    if user is None:
        raise _user_not_found(user_id)
    return user
