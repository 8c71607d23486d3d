"""
tests/unit/test_guard.py — Unit tests for ownership authorization (403 layer).
"""

from __future__ import annotations

import uuid

import pytest

from chirpstack.app.errors import AppError, ErrorCode
from chirpstack.app.security.guard import Decision, authorize, require_owner


def test_owner_is_allowed():
    user_id = uuid.uuid4()
    assert authorize(user_id, user_id) is Decision.ALLOWED


def test_other_user_is_denied():
    assert authorize(uuid.uuid4(), uuid.uuid4()) is Decision.DENIED


def test_unowned_resource_is_denied():
    assert authorize(None, uuid.uuid4()) is Decision.DENIED


def test_require_owner_passes_for_owner():
    user_id = uuid.uuid4()
    assert require_owner(user_id, user_id) is None


def test_require_owner_raises_forbidden_403():
    with pytest.raises(AppError) as exc_info:
        require_owner(uuid.uuid4(), uuid.uuid4(), "Only the author may delete this chirp.")

    err = exc_info.value
    assert err.code == ErrorCode.FORBIDDEN
    assert err.http_status == 403
    assert err.message == "Only the author may delete this chirp."
