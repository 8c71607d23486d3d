"""
security/tokens.py — JWT access token issuer / validator.

Token design:
  - Algorithm: HS256, keyed by the server secret (JWT_SECRET_KEY).
  - Claims: iss = "chirpy", iat = now (UTC), exp = iat + ttl, sub = str(user_id).
  - Not persisted. Valid iff the signature verifies, the issuer matches,
    and now < exp.

Lifetime policy:
  Every token is clamped to a ceiling (max_ttl, JWT_ACCESS_TOKEN_MAX_EXPIRES
  in config) so no caller can mint a long-lived access token.
  resolve_token_ttl() turns an optional client-requested lifetime into the
  ttl that issue_access_token() receives.

No Flask imports: secret and ttl are explicit arguments, so everything here is
unit-testable without an app context.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import jwt

from chirpstack.app.errors import AppError, ErrorCode

ISSUER = "chirpy"
ALGORITHM = "HS256"
DEFAULT_MAX_TTL = timedelta(hours=1)


def resolve_token_ttl(
        requested_seconds: int | None,
        default: timedelta,
        ceiling: timedelta = DEFAULT_MAX_TTL,
) -> timedelta:
    """
    Resolves the lifetime of a login's access token.

      missing / zero / negative  → default
      above the ceiling          → ceiling
      otherwise                  → requested
    """
    if not requested_seconds or requested_seconds <= 0:
        return min(default, ceiling)
    # Compared as seconds: timedelta overflows long before an int does.
    if requested_seconds >= ceiling.total_seconds():
        return ceiling
    return timedelta(seconds=requested_seconds)


def issue_access_token(
        user_id: uuid.UUID,
        secret: str,
        ttl: timedelta,
        max_ttl: timedelta = DEFAULT_MAX_TTL,
) -> str:
    """Creates a signed access token for `user_id`, valid for min(ttl, max_ttl)."""
    now = datetime.now(timezone.utc)
    payload = {
        "iss": ISSUER,
        "iat": now,
        "exp": now + min(ttl, max_ttl),
        "sub": str(user_id),
    }
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def validate_access_token(token: str, secret: str) -> uuid.UUID:
    """
    Verifies an access token and returns the user id in its `sub` claim.

    Raises AppError (401) with:
      TOKEN_WRONG_ALGORITHM   — alg header is not HS256 (incl. "none").
                                Checked before the signature.
      TOKEN_INVALID_SIGNATURE — signature does not verify under `secret`.
      TOKEN_EXPIRED           — now >= exp.
      TOKEN_MALFORMED_SUBJECT — sub missing or not a UUID.
      TOKEN_INVALID           — anything else (undecodable, wrong issuer,
                                missing exp/iat/iss).
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            issuer=ISSUER,
            options={"require": ["exp", "iat", "iss"]},
        )
    except jwt.InvalidAlgorithmError:
        raise _token_error(
            ErrorCode.TOKEN_WRONG_ALGORITHM,
            "The access token is not signed with the expected algorithm.",
        ) from None
    except jwt.InvalidSignatureError:
        raise _token_error(
            ErrorCode.TOKEN_INVALID_SIGNATURE,
            "The access token signature is invalid.",
        ) from None
    except jwt.ExpiredSignatureError:
        raise _token_error(
            ErrorCode.TOKEN_EXPIRED,
            "The access token has expired. Use POST /api/refresh to obtain a new one.",
        ) from None
    except jwt.InvalidTokenError:
        # Covers: malformed token, wrong issuer, missing required claims, etc.
        raise _token_error(
            ErrorCode.TOKEN_INVALID,
            "The access token is invalid or has been tampered with.",
        ) from None

    return _parse_subject(payload.get("sub"))


def _parse_subject(sub) -> uuid.UUID:
    if sub is None:
        raise _token_error(
            ErrorCode.TOKEN_MALFORMED_SUBJECT,
            "The access token is missing the required 'sub' claim.",
        )
    try:
        return uuid.UUID(str(sub))
    except ValueError:
        raise _token_error(
            ErrorCode.TOKEN_MALFORMED_SUBJECT,
            "The 'sub' claim in the access token is not a valid user ID.",
        ) from None


def _token_error(code: str, message: str) -> AppError:
    return AppError(code, message, 401)
