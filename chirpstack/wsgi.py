"""
wsgi.py — WSGI entry point.

    flask --app chirpstack.wsgi run --port 8080
    gunicorn chirpstack.wsgi:app

FLASK_ENV selects the config class (development / testing / production).
"""

import os

from chirpstack.app import create_app

app = create_app(os.getenv("FLASK_ENV", "development"))
