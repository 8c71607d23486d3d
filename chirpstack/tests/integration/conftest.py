"""
tests/integration/conftest.py — Fixtures and helpers for all integration tests.

Design:
  - Tests run against an in-memory SQLite database (TestingConfig). Flask-SQLAlchemy
    pins `sqlite://` to a single connection, so the schema survives across
    requests for the whole session.
  - The app is created once per session using create_app("testing").
  - All tables are created once via db.create_all() at session start.
  - Between tests, all rows are deleted in FK-safe order and the /app hit
    counter is zeroed, so tests are isolated.

Helper functions (not fixtures) are provided for common operations:
  - create_user(client, ...)  → user dict
  - login(client, ...)        → user dict + token + refresh_token
  - auth_headers(token)       → {"Authorization": "Bearer <token>"}
  - post_chirp(client, ...)   → HTTP response

These are plain functions (not pytest fixtures) so they can be called with
arbitrary arguments in any test.
"""

from __future__ import annotations

import pytest
from sqlalchemy import text

from chirpstack.app import create_app
from chirpstack.app.extensions import db as _db
from chirpstack.app.extensions import fileserver_hits

PASSWORD = "04234"


# ═══════════════════════════════════════════════════════════════════════════
# Session-scoped app fixture
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture(scope="session")
def app():
    """
    Creates the Flask application in 'testing' mode once for the entire test session.
    """
    flask_app = create_app("testing")

    with flask_app.app_context():
        _db.create_all()

    yield flask_app

    with flask_app.app_context():
        _db.drop_all()


# ═══════════════════════════════════════════════════════════════════════════
# Function-scoped test isolation
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture(autouse=True)
def clean_tables(app):
    """
    Deletes all rows after every test, children first.
    """
    yield  # run the test

    with app.app_context():
        _db.session.rollback()  # discard any uncommitted state from a failed test
        _db.session.execute(text("DELETE FROM chirps"))
        _db.session.execute(text("DELETE FROM refresh_tokens"))
        _db.session.execute(text("DELETE FROM users"))
        _db.session.commit()

    fileserver_hits.reset()


# ═══════════════════════════════════════════════════════════════════════════
# Client fixture
# ═══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def client(app):
    """Flask test client. Each test gets a fresh client (function-scoped)."""
    return app.test_client()


# ═══════════════════════════════════════════════════════════════════════════
# Shared helper functions (not fixtures)
# ═══════════════════════════════════════════════════════════════════════════

def create_user(client, email: str = "walt@breakingbad.com", password: str = PASSWORD) -> dict:
    """
    Creates an account and returns the user data dict.
    Returns: {"id", "email", "is_chirpy_red", "created_at", "updated_at"}
    """
    resp = client.post("/api/users", json={"email": email, "password": password})
    assert resp.status_code == 201, f"create_user failed: {resp.get_json()}"
    return resp.get_json()["data"]


def login(client, email: str = "walt@breakingbad.com", password: str = PASSWORD, **extra) -> dict:
    """
    Logs in and returns the response data dict.
    Returns: user fields + {"token": "...", "refresh_token": "..."}
    """
    resp = client.post("/api/login", json={"email": email, "password": password, **extra})
    assert resp.status_code == 200, f"login failed: {resp.get_json()}"
    return resp.get_json()["data"]


def signup_and_login(client, email: str = "walt@breakingbad.com") -> dict:
    """Creates an account and logs it in. Returns the login data dict."""
    create_user(client, email=email)
    return login(client, email=email)


def auth_headers(token: str) -> dict:
    """Returns the Authorization header dict for use in test requests."""
    return {"Authorization": f"Bearer {token}"}


def post_chirp(client, token: str, body: str = "I'm the one who knocks!"):
    """Posts a chirp as the token's owner. Returns the HTTP response."""
    return client.post("/api/chirps", json={"body": body}, headers=auth_headers(token))
