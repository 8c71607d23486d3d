"""
security/passwords.py — bcrypt credential hasher.

bcrypt only looks at the first 72 bytes of its input. Rather than silently
truncating, longer passwords are rejected up front with PASSWORD_TOO_LONG.

The produced hash embeds the cost factor and salt ("$2b$12$<salt><digest>"),
so verification needs no side inputs.

No Flask imports: callers pass the cost factor (BCRYPT_LOG_ROUNDS) explicitly.
"""

from __future__ import annotations

import bcrypt

from chirpstack.app.errors import AppError, ErrorCode

MAX_PASSWORD_BYTES = 72
DEFAULT_ROUNDS = 12


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """
    Returns the bcrypt hash of `password` as a str.

    Raises:
      AppError(PASSWORD_TOO_LONG, 400) — UTF-8 encoding exceeds 72 bytes.
    """
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        raise AppError(
            ErrorCode.PASSWORD_TOO_LONG,
            f"Password must be at most {MAX_PASSWORD_BYTES} bytes long.",
            400,
            field="password",
        )
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def check_password_hash(password: str, password_hash: str) -> None:
    """
    Verifies `password` against a stored bcrypt hash. Returns None on success.

    Raises:
      AppError(INVALID_CREDENTIALS, 401) — password does not match.
      AppError(MALFORMED_HASH, 500)      — stored value is not a bcrypt hash.

    The INVALID_CREDENTIALS message is the same one login uses for an unknown
    email, so callers can re-raise it unchanged.
    """
    raw = password.encode("utf-8")
    if len(raw) > MAX_PASSWORD_BYTES:
        # Could never have been hashed by hash_password().
        raise invalid_credentials()

    try:
        matches = bcrypt.checkpw(raw, password_hash.encode("utf-8"))
    except ValueError:
        # bcrypt raises "Invalid salt" for anything that is not $2a/$2b/$2y.
        raise AppError(
            ErrorCode.MALFORMED_HASH,
            "An unexpected error occurred. Please try again later.",
            500,
        ) from None

    if not matches:
        raise invalid_credentials()


def invalid_credentials() -> AppError:
    """The single error for "unknown email" and "wrong password" alike."""
    return AppError(
        ErrorCode.INVALID_CREDENTIALS,
        "Incorrect email or password.",
        401,
    )
