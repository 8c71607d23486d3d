"""
Unit tests for security/refresh_tokens.py with the store mocked out.

The end-to-end behaviour against a real database is covered in
tests/integration/test_auth_flow.py.
"""

from __future__ import annotations

import hashlib
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from chirpstack.app.errors import AppError, ErrorCode
from chirpstack.app.security import refresh_tokens

CRUD = "chirpstack.app.security.refresh_tokens.refresh_token_crud"


def test_generate_is_64_hex_chars_and_unique():
    first = refresh_tokens.generate_refresh_token()
    second = refresh_tokens.generate_refresh_token()

    assert len(first) == 64
    int(first, 16)  # hex
    assert first != second


def test_store_persists_sha256_digest_not_raw_token():
    session = MagicMock()
    user_id = uuid.uuid4()
    raw = "a" * 64

    with patch(CRUD) as crud:
        refresh_tokens.store_refresh_token(raw, user_id, timedelta(days=60), session)

    kwargs = crud.store_refresh_token.call_args.kwargs
    assert kwargs["token_hash"] == hashlib.sha256(raw.encode()).hexdigest()
    assert kwargs["token_hash"] != raw
    assert kwargs["user_id"] == user_id

    expected_expiry = datetime.now(timezone.utc) + timedelta(days=60)
    assert abs(kwargs["expires_at"] - expected_expiry) < timedelta(seconds=5)


def test_resolve_returns_owner_id():
    user_id = uuid.uuid4()
    with patch(CRUD) as crud:
        crud.get_user_from_refresh_token.return_value = SimpleNamespace(id=user_id)
        assert refresh_tokens.resolve_refresh_token("raw", MagicMock()) == user_id


def test_resolve_unknown_raises_refresh_token_invalid():
    with patch(CRUD) as crud:
        crud.get_user_from_refresh_token.return_value = None
        with pytest.raises(AppError) as exc_info:
            refresh_tokens.resolve_refresh_token("raw", MagicMock())

    err = exc_info.value
    assert err.code == ErrorCode.REFRESH_TOKEN_INVALID
    assert err.http_status == 401


def test_revoke_existing_token_succeeds():
    with patch(CRUD) as crud:
        crud.revoke_refresh_token.return_value = SimpleNamespace(revoked_at=datetime.now(timezone.utc))
        assert refresh_tokens.revoke_refresh_token("raw", MagicMock()) is None

    looked_up = crud.revoke_refresh_token.call_args.args[1]
    assert looked_up == hashlib.sha256(b"raw").hexdigest()


def test_revoke_unknown_token_raises():
    with patch(CRUD) as crud:
        crud.revoke_refresh_token.return_value = None
        with pytest.raises(AppError) as exc_info:
            refresh_tokens.revoke_refresh_token("raw", MagicMock())
    assert exc_info.value.code == ErrorCode.REFRESH_TOKEN_INVALID
