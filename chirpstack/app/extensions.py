"""
extensions.py — Flask extension singletons.

Initialises SQLAlchemy and marshmallow as module-level objects so they can be
imported anywhere without creating circular dependencies.

Pattern:
    1. Create the extension object here (no app attached yet).
    2. Call init_app(app) inside the app factory in app/__init__.py.
    3. Import `db`, `ma` or `fileserver_hits` from here wherever needed.

    from chirpstack.app.extensions import db, ma

Do not pass the app object directly to SQLAlchemy() or Marshmallow() at import
time — that would prevent running tests with a separate test app instance.
"""

from flask_marshmallow import Marshmallow
from flask_sqlalchemy import SQLAlchemy

from chirpstack.app.metrics import HitCounter

db = SQLAlchemy()

# Marshmallow instance: used for the response (dump-only) schemas.
#
# IMPORTANT: schema inheritance rule:
#   Request validation schemas (in app/schemas/) inherit from
#   marshmallow.Schema directly, NOT from ma.Schema, so unit tests can load
#   them without a Flask app. Only response schemas, which are dumped inside
#   a request, use ma.Schema.
ma = Marshmallow()

# Process-wide /app file-server hit counter, shown on /admin/metrics.
fileserver_hits = HitCounter()
