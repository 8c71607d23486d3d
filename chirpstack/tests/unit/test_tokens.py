"""
tests/unit/test_tokens.py — Unit tests for security/tokens.py.

No Flask app: secret and ttl are passed explicitly. Secrets are at least
32 bytes so PyJWT does not warn about short HMAC keys.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from chirpstack.app.errors import AppError, ErrorCode
from chirpstack.app.security.tokens import (
    ALGORITHM,
    DEFAULT_MAX_TTL,
    ISSUER,
    issue_access_token,
    resolve_token_ttl,
    validate_access_token,
)

SECRET = "unit-test-secret-key-0123456789abcdef"
OTHER_SECRET = "another-unit-test-secret-0123456789abcdef"


def _forge(payload: dict, secret: str = SECRET, algorithm: str = ALGORITHM, **kwargs) -> str:
    return jwt.encode(payload, secret, algorithm=algorithm, **kwargs)


def _claims(**overrides) -> dict:
    now = datetime.now(timezone.utc)
    claims = {
        "iss": ISSUER,
        "iat": now,
        "exp": now + timedelta(minutes=5),
        "sub": str(uuid.uuid4()),
    }
    claims.update(overrides)
    return claims


def _assert_token_error(token: str, code: str, secret: str = SECRET) -> None:
    with pytest.raises(AppError) as exc_info:
        validate_access_token(token, secret)
    err = exc_info.value
    assert err.code == code
    assert err.http_status == 401


# ═══════════════════════════════════════════════════════════════════════════
# issue / validate round trip
# ═══════════════════════════════════════════════════════════════════════════

class TestIssueAccessToken:

    def test_round_trip_returns_user_id(self):
        user_id = uuid.uuid4()
        token = issue_access_token(user_id, SECRET, timedelta(minutes=5))

        assert validate_access_token(token, SECRET) == user_id

    def test_token_has_three_segments(self):
        token = issue_access_token(uuid.uuid4(), SECRET, timedelta(minutes=5))
        assert len(token.split(".")) == 3

    def test_claims(self):
        user_id = uuid.uuid4()
        token = issue_access_token(user_id, SECRET, timedelta(minutes=5))

        header = jwt.get_unverified_header(token)
        payload = jwt.decode(token, options={"verify_signature": False})

        assert header["alg"] == "HS256"
        assert payload["iss"] == "chirpy"
        assert payload["sub"] == str(user_id)
        assert payload["exp"] - payload["iat"] == 300

    def test_ttl_is_clamped_to_max_ttl(self):
        token = issue_access_token(uuid.uuid4(), SECRET, timedelta(days=30))
        payload = jwt.decode(token, options={"verify_signature": False})

        assert payload["exp"] - payload["iat"] == int(DEFAULT_MAX_TTL.total_seconds())

    def test_custom_max_ttl(self):
        token = issue_access_token(
            uuid.uuid4(), SECRET, timedelta(hours=1), max_ttl=timedelta(minutes=10),
        )
        payload = jwt.decode(token, options={"verify_signature": False})
        assert payload["exp"] - payload["iat"] == 600


# ═══════════════════════════════════════════════════════════════════════════
# validate_access_token failures
# ═══════════════════════════════════════════════════════════════════════════

class TestValidateAccessToken:

    def test_wrong_secret_is_invalid_signature(self):
        token = issue_access_token(uuid.uuid4(), SECRET, timedelta(minutes=5))
        _assert_token_error(token, ErrorCode.TOKEN_INVALID_SIGNATURE, secret=OTHER_SECRET)

    def test_expired_token(self):
        token = issue_access_token(uuid.uuid4(), SECRET, timedelta(seconds=-10))
        _assert_token_error(token, ErrorCode.TOKEN_EXPIRED)

    def test_token_is_expired_at_its_expiry_instant(self):
        # exp == iat: now has already reached exp when it is validated.
        token = issue_access_token(uuid.uuid4(), SECRET, timedelta(0))
        payload = jwt.decode(token, options={"verify_signature": False})

        assert payload["exp"] == payload["iat"]
        _assert_token_error(token, ErrorCode.TOKEN_EXPIRED)

    def test_exp_equal_to_now_is_expired(self):
        now = datetime.now(timezone.utc).replace(microsecond=0)
        token = _forge(_claims(iat=now - timedelta(minutes=1), exp=now))
        _assert_token_error(token, ErrorCode.TOKEN_EXPIRED)

    def test_garbage_is_invalid(self):
        _assert_token_error("not.a.jwt", ErrorCode.TOKEN_INVALID)

    def test_empty_string_is_invalid(self):
        _assert_token_error("", ErrorCode.TOKEN_INVALID)

    def test_hs512_is_wrong_algorithm(self):
        token = _forge(_claims(), secret=SECRET * 2, algorithm="HS512")
        _assert_token_error(token, ErrorCode.TOKEN_WRONG_ALGORITHM)

    def test_alg_none_is_wrong_algorithm(self):
        token = _forge(_claims(), secret=None, algorithm="none")
        _assert_token_error(token, ErrorCode.TOKEN_WRONG_ALGORITHM)

    def test_wrong_algorithm_is_reported_before_signature(self):
        # Signed with a different key AND a different algorithm.
        token = _forge(_claims(), secret=OTHER_SECRET * 2, algorithm="HS512")
        _assert_token_error(token, ErrorCode.TOKEN_WRONG_ALGORITHM)

    def test_wrong_issuer_is_invalid(self):
        _assert_token_error(_forge(_claims(iss="someone-else")), ErrorCode.TOKEN_INVALID)

    def test_missing_exp_is_invalid(self):
        claims = _claims()
        del claims["exp"]
        _assert_token_error(_forge(claims), ErrorCode.TOKEN_INVALID)

    def test_missing_subject(self):
        claims = _claims()
        del claims["sub"]
        _assert_token_error(_forge(claims), ErrorCode.TOKEN_MALFORMED_SUBJECT)

    def test_non_uuid_subject(self):
        _assert_token_error(_forge(_claims(sub="not-a-uuid")), ErrorCode.TOKEN_MALFORMED_SUBJECT)


# ═══════════════════════════════════════════════════════════════════════════
# resolve_token_ttl
# ═══════════════════════════════════════════════════════════════════════════

class TestResolveTokenTtl:

    DEFAULT = timedelta(hours=1)

    @pytest.mark.parametrize("requested", [None, 0, -5])
    def test_missing_zero_or_negative_uses_default(self, requested):
        assert resolve_token_ttl(requested, default=self.DEFAULT) == self.DEFAULT

    def test_within_ceiling_is_honoured(self):
        assert resolve_token_ttl(60, default=self.DEFAULT) == timedelta(seconds=60)

    def test_above_ceiling_is_clamped(self):
        assert resolve_token_ttl(7200, default=self.DEFAULT) == timedelta(hours=1)

    def test_huge_request_is_clamped(self):
        assert resolve_token_ttl(10**15, default=self.DEFAULT) == timedelta(hours=1)

    def test_request_equal_to_ceiling(self):
        assert resolve_token_ttl(3600, default=self.DEFAULT) == timedelta(hours=1)

    def test_default_is_clamped_too(self):
        assert resolve_token_ttl(
            None, default=timedelta(hours=5), ceiling=timedelta(hours=2),
        ) == timedelta(hours=2)
