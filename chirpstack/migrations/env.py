"""
chirpstack/migrations/env.py — Alembic environment.

Database URL precedence:
  1. sqlalchemy.url already set on the Alembic config (tests, programmatic runs)
  2. TEST_DATABASE_URL when TEST_RUN=1
  3. DB_URL, then DATABASE_URL, from the environment / .env file
"""

from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from dotenv import load_dotenv
from sqlalchemy import engine_from_config, pool

from chirpstack.app.extensions import db
from chirpstack.app.models import chirp, refresh_token, user  # noqa: F401

load_dotenv()

target_metadata = db.metadata

# ── Alembic config ────────────────────────────────────────────────────────
config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def _database_url() -> str:
    configured = config.get_main_option("sqlalchemy.url")
    if configured:
        return configured
    if os.getenv("TEST_RUN"):
        return os.environ["TEST_DATABASE_URL"]
    url = os.getenv("DB_URL") or os.environ["DATABASE_URL"]
    # Heroku-style URLs are not accepted by SQLAlchemy 2.x
    if url.startswith("postgres://"):
        url = "postgresql://" + url[len("postgres://"):]
    return url


db_url = _database_url()
config.set_main_option("sqlalchemy.url", db_url)


def run_migrations_offline() -> None:
    context.configure(
        url=db_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
