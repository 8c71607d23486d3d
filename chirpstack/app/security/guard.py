"""
security/guard.py — ownership authorization.

Runs AFTER authentication. The per-request credential check is:

    NoToken ──extract──▶ TokenPresent ──validate──▶ ValidUserID | AuthnFailed (401)
    ValidUserID ──authorize(owner)──▶ Allowed | AuthzFailed (403)

Authentication lives in middleware/auth_middleware.py; this module only
answers "may this (already authenticated) user touch this resource?".
"""

from __future__ import annotations

import enum
import uuid

from chirpstack.app.errors import AppError, ErrorCode


class Decision(enum.Enum):
    ALLOWED = "allowed"
    DENIED = "denied"


def authorize(
        resource_owner_id: uuid.UUID | None,
        requester_id: uuid.UUID,
) -> Decision:
    """ALLOWED iff the resource has an owner and it is the requester."""
    if resource_owner_id is not None and resource_owner_id == requester_id:
        return Decision.ALLOWED
    return Decision.DENIED


def require_owner(
        resource_owner_id: uuid.UUID | None,
        requester_id: uuid.UUID,
        message: str = "You are not allowed to modify this resource.",
) -> None:
    """Raises AppError(FORBIDDEN, 403) unless authorize() allows the request."""
    if authorize(resource_owner_id, requester_id) is Decision.DENIED:
        raise AppError(ErrorCode.FORBIDDEN, message, 403)
