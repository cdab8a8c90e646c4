"""Alembic environment configuration for the Gestor de Jornadas schema.

Se ejecuta a través de Flask-Migrate: la URL y la metadata salen de la app
Flask activa (``flask db upgrade`` o ``scripts/run_migrations.py``).
"""

from __future__ import annotations

import logging
from logging.config import fileConfig

from alembic import context
from flask import current_app

config = context.config
logger = logging.getLogger("alembic.env")


def _configure_logging() -> None:
    # En tests los handlers del root pertenecen a pytest
    if current_app.config.get("TESTING"):
        return
    if config.config_file_name:
        fileConfig(config.config_file_name, disable_existing_loggers=False)


def _escape_percent(url: str) -> str:
    return url.replace("%", "%%")


def _migrate_extension():
    return current_app.extensions["migrate"]


def _get_engine():
    return _migrate_extension().db.engine


def _get_url() -> str:
    url = _get_engine().url.render_as_string(hide_password=False)
    if not url:
        raise RuntimeError("No database URL available for Alembic")
    config.set_main_option("sqlalchemy.url", _escape_percent(url))
    return url


def _configure_args() -> dict:
    args = dict(_migrate_extension().configure_args or {})
    args.setdefault("compare_type", True)
    return args


def run_migrations_offline() -> None:
    context.configure(
        url=_get_url(),
        target_metadata=_migrate_extension().db.metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_configure_args(),
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = _get_engine()

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=_migrate_extension().db.metadata,
            **_configure_args(),
        )
        with context.begin_transaction():
            context.run_migrations()


def main() -> None:
    _configure_logging()
    if context.is_offline_mode():
        run_migrations_offline()
    else:
        run_migrations_online()


main()
