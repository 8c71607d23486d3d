"""
errors.py — the one exception type the API raises, and its code registry.

Services, security helpers and middleware raise AppError; the handlers in
app/__init__.py render it as {"error": {"code", "message", "field"?}}.

Conventions:
  - A code, once shipped, keeps its meaning. Messages can be reworded freely.
  - 401 means the caller could not be authenticated; 403 means the caller is
    known but may not act on the resource. Never use one for the other.
  - SQLAlchemyError is not translated into an AppError; it reaches the global
    handler as is, which logs it and answers INTERNAL_ERROR.
"""

from __future__ import annotations


class AppError(Exception):
    """Carries a registry code, a human-readable message and the HTTP status."""

    def __init__(self, code: str, message: str, http_status: int, field: str | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.http_status = http_status
        # Request field the error refers to, when there is one.
        self.field = field

    def to_dict(self) -> dict:
        error = {"code": self.code, "message": self.message}
        if self.field is not None:
            error["field"] = self.field
        return {"error": error}

    def __repr__(self) -> str:
        return f"AppError({self.code!r}, {self.http_status}, {self.message!r})"


# ── Error Code Registry ────────────────────────────────────────────────────
#
# Grouped by the HTTP status each code is answered with.
# The string values are part of the public API.
# ──────────────────────────────────────────────────────────────────────────

class ErrorCode:

    # ── 400: bad request body or query ──────────────────────────────────────
    MISSING_FIELD              = "MISSING_FIELD"
    INVALID_FIELD              = "INVALID_FIELD"
    MALFORMED_REQUEST          = "MALFORMED_REQUEST"      # body is not valid JSON
    CHIRP_TOO_LONG             = "CHIRP_TOO_LONG"
    PASSWORD_TOO_LONG          = "PASSWORD_TOO_LONG"

    # ── 409: conflict with stored data ──────────────────────────────────────
    DUPLICATE_EMAIL            = "DUPLICATE_EMAIL"

    # ── 404: no such resource ───────────────────────────────────────────────
    USER_NOT_FOUND             = "USER_NOT_FOUND"
    CHIRP_NOT_FOUND            = "CHIRP_NOT_FOUND"
    NOT_FOUND                  = "NOT_FOUND"              # unknown route or static file

    # ── 405: wrong verb ─────────────────────────────────────────────────────
    METHOD_NOT_ALLOWED         = "METHOD_NOT_ALLOWED"

    # ── 401 / 403: authn and authz ──────────────────────────────────────────
    # 401: credentials missing, wrong or unverifiable.
    # 403: authenticated, but not the owner.
    INVALID_CREDENTIALS        = "INVALID_CREDENTIALS"      # 401: unknown email OR wrong password
    TOKEN_MISSING              = "TOKEN_MISSING"            # 401
    TOKEN_MALFORMED_HEADER     = "TOKEN_MALFORMED_HEADER"   # 401: not "Bearer <token>"
    TOKEN_INVALID              = "TOKEN_INVALID"            # 401: undecodable, bad issuer/claims
    TOKEN_INVALID_SIGNATURE    = "TOKEN_INVALID_SIGNATURE"  # 401
    TOKEN_WRONG_ALGORITHM      = "TOKEN_WRONG_ALGORITHM"    # 401: alg header is not HS256
    TOKEN_EXPIRED              = "TOKEN_EXPIRED"            # 401
    TOKEN_MALFORMED_SUBJECT    = "TOKEN_MALFORMED_SUBJECT"  # 401: sub is not a user id
    REFRESH_TOKEN_INVALID      = "REFRESH_TOKEN_INVALID"    # 401: unknown, revoked or expired token
    FORBIDDEN                  = "FORBIDDEN"                # 403

    # ── 500: server side ────────────────────────────────────────────────────
    MALFORMED_HASH             = "MALFORMED_HASH"
    INTERNAL_ERROR             = "INTERNAL_ERROR"
