"""
middleware/auth_middleware.py — bearer token parsing and @require_auth.

@require_auth runs before the view: it pulls the token out of
"Authorization: Bearer <token>", validates it as an access token
(security/tokens.py) and stores the user id (uuid.UUID) on flask.g.user_id.
Any failure is a 401 AppError; the view never runs.

Only authentication happens here. Whether the caller may touch a given
resource (403) is decided in the services through security/guard.py, which
see the caller as a plain user_id argument.
"""

from __future__ import annotations

import functools
from typing import Callable, Mapping

from flask import current_app, g, request

from chirpstack.app.errors import AppError, ErrorCode
from chirpstack.app.security.tokens import validate_access_token


def get_bearer_token(headers: Mapping[str, str]) -> str:
    """
    Extracts the token from an "Authorization: Bearer <token>" header.

    Used for both access tokens (@require_auth) and refresh tokens
    (POST /api/refresh, POST /api/revoke).

    Raises:
      AppError(TOKEN_MISSING, 401)          — header absent or empty.
      AppError(TOKEN_MALFORMED_HEADER, 401) — not exactly two parts, or the
                                              scheme is not "Bearer".
    """
    auth_header = headers.get("Authorization", "")

    if not auth_header or not auth_header.strip():
        raise AppError(
            ErrorCode.TOKEN_MISSING,
            "Missing Authorization header; send \"Authorization: Bearer <token>\".",
            401,
        )

    parts = auth_header.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise AppError(
            ErrorCode.TOKEN_MALFORMED_HEADER,
            "Malformed Authorization header; expected \"Bearer <token>\".",
            401,
        )

    return parts[1]


def require_auth(f: Callable) -> Callable:
    """
    Rejects the request with 401 unless it carries a valid access token;
    otherwise sets g.user_id and calls the view.

        @chirps_bp.route("/chirps", methods=["POST"])
        @require_auth
        def create_chirp():
            author_id = g.user_id
    """
    @functools.wraps(f)
    def decorated(*args, **kwargs):
        _authenticate_request()
        return f(*args, **kwargs)

    return decorated


def _authenticate_request() -> None:
    """
    Runs extraction + validation and sets flask.g.user_id.

    Separated from the decorator wrapper so tests can call it inside a
    test_request_context without wrapping a real view function.
    """
    try:
        raw_token = get_bearer_token(request.headers)
        user_id = validate_access_token(raw_token, current_app.config["JWT_SECRET_KEY"])
    except AppError as error:
        current_app.logger.info(
            "Authentication failed on %s %s: %s",
            request.method,
            request.path,
            error.code,
        )
        raise

    g.user_id = user_id
