"""
app/__init__.py — create_app(), the Chirpy application factory.

Building the app is deferred to create_app() so tests can make their own
instance and Alembic can import the models without a running server.

create_app() wires, in order:
  - the config class picked from config_by_name (production is validated)
  - Flask-SQLAlchemy and flask-marshmallow
  - the model modules, so db.metadata knows every table
  - the blueprints under /api, /admin and /app
  - request logging and the JSON error handlers
"""

from __future__ import annotations

import traceback

from flask import Flask, jsonify, request
from marshmallow import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from chirpstack.app.errors import AppError, ErrorCode
from chirpstack.config import config_by_name, validate_production_config

_GENERIC_500_MESSAGE = "An unexpected error occurred. Please try again later."

_HTTP_ERROR_CODES = {
    400: ErrorCode.MALFORMED_REQUEST,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
}

# Messages for codes that marshmallow validators carry as their error text.
_CODE_MESSAGES = {
    ErrorCode.CHIRP_TOO_LONG: "Chirp is too long.",
}


# ── Application factory ────────────────────────────────────────────────────

def create_app(config_name: str = "development") -> Flask:
    """
    Builds a configured Chirpy app.

    Args:
        config_name: "development", "testing" or "production"; unknown
                     names fall back to development.
    """
    app = Flask(__name__, static_folder=None)

    # ── Configuration ──────────────────────────────────────────────────────
    app.config.from_object(config_by_name.get(config_name, config_by_name["development"]))
    if config_name == "production":
        validate_production_config(app)  # raises ValueError if misconfigured

    app.logger.setLevel(app.config["LOG_LEVEL"])

    # ── Extensions ─────────────────────────────────────────────────────────
    # Imported here so importing this package never touches the models.
    from chirpstack.app.extensions import db, ma
    db.init_app(app)
    ma.init_app(app)

    # ── Model registration ─────────────────────────────────────────────────
    from chirpstack.app.models import chirp, refresh_token, user  # noqa: F401

    _register_blueprints(app)
    _register_request_logging(app)
    _register_error_handlers(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """
    chirps_bp, auth_bp and health_bp are mounted on /api itself because each
    owns several top-level paths (/api/chirps and /api/validate_chirp;
    /api/login, /api/refresh and /api/revoke; /api/healthz).
    """
    from chirpstack.app.routes.admin import admin_bp, health_bp
    from chirpstack.app.routes.auth import auth_bp
    from chirpstack.app.routes.chirps import chirps_bp
    from chirpstack.app.routes.fileserver import fileserver_bp
    from chirpstack.app.routes.users import users_bp
    from chirpstack.app.routes.webhooks import webhooks_bp

    app.register_blueprint(health_bp,     url_prefix="/api")
    app.register_blueprint(auth_bp,       url_prefix="/api")
    app.register_blueprint(chirps_bp,     url_prefix="/api")
    app.register_blueprint(users_bp,      url_prefix="/api/users")
    app.register_blueprint(webhooks_bp,   url_prefix="/api/polka")
    app.register_blueprint(admin_bp,      url_prefix="/admin")
    app.register_blueprint(fileserver_bp, url_prefix="/app")


def _register_request_logging(app: Flask) -> None:

    @app.before_request
    def log_request():
        app.logger.info("%s %s", request.method, request.path)


# ── Error handling ─────────────────────────────────────────────────────────

def _error_response(code: str, message: str, status: int, field: str | None = None):
    return jsonify(AppError(code, message, status, field).to_dict()), status


def _register_error_handlers(app: Flask) -> None:
    """
    Every failure leaves the app as {"error": {"code", "message", "field"?}}.

      AppError        → its own code and status
      ValidationError → first field error; MISSING_FIELD, INVALID_FIELD, or
                        the registry code the validator used as its message
      SQLAlchemyError → session rolled back, INTERNAL_ERROR 500
      HTTPException   → werkzeug's 400/404/405 mapped onto registry codes
      Exception       → INTERNAL_ERROR 500

    Tracebacks go to app.logger only.
    """
    from chirpstack.app.extensions import db

    @app.errorhandler(AppError)
    def handle_app_error(error: AppError):
        if error.http_status >= 500:
            app.logger.error("%r\n%s", error, traceback.format_exc())
        return jsonify(error.to_dict()), error.http_status

    @app.errorhandler(ValidationError)
    def handle_validation_error(error: ValidationError):
        field, message = _first_validation_message(error.messages)

        if message in _CODE_MESSAGES:
            code = message
            message = _CODE_MESSAGES[code]
        elif message.startswith("Missing data for required field"):
            code = ErrorCode.MISSING_FIELD
        else:
            code = ErrorCode.INVALID_FIELD

        return _error_response(code, message, 400, field)

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(error: SQLAlchemyError):
        db.session.rollback()
        app.logger.error("Store error: %s\n%s", error, traceback.format_exc())
        return _error_response(ErrorCode.INTERNAL_ERROR, _GENERIC_500_MESSAGE, 500)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException):
        code = _HTTP_ERROR_CODES.get(error.code, ErrorCode.INTERNAL_ERROR)
        return _error_response(code, error.description, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):
        app.logger.error("Unhandled exception: %s\n%s", error, traceback.format_exc())
        return _error_response(ErrorCode.INTERNAL_ERROR, _GENERIC_500_MESSAGE, 500)


def _first_validation_message(messages) -> tuple[str | None, str]:
    """
    Walks marshmallow's (possibly nested) messages and returns
    (top-level field name or None, first message).
    """
    if isinstance(messages, dict):
        for field_name, field_errors in messages.items():
            _, message = _first_validation_message(field_errors)
            return (None if field_name == "_schema" else field_name), message
        return None, "Invalid input."
    if isinstance(messages, list):
        if not messages:
            return None, "Invalid input."
        return _first_validation_message(messages[0])
    return None, str(messages)
