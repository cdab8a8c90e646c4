"""Application factory and bootstrap helpers."""
from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import click
from flask import Flask, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .config import BASE_DIR, AppConfig
from .extensions import db, migrate

_logger = logging.getLogger(__name__)

MIGRATIONS_DIR = BASE_DIR / "migrations"


def _format_seed_summary(stats: dict) -> str:
    created = stats.get("created", 0)
    updated = stats.get("updated", 0)
    existing = stats.get("existing", 0)
    return f"creados={created}, actualizados={updated}, existentes={existing}"


def _register_seed_cli(app: Flask) -> None:
    @app.cli.command("seed:recursos")
    @click.option("--lote", default="base", show_default=True, help="Lote de recursos a cargar")
    def seed_recursos_cli(lote: str) -> None:
        """Carga idempotente de un lote de recursos por código."""
        from datos_iniciales import LOTES, obtener_lote
        from services.recurso_service import RecursoService

        if lote not in LOTES:
            raise click.ClickException(
                f"Lote desconocido '{lote}'. Disponibles: {', '.join(sorted(LOTES))}"
            )

        stats = RecursoService().upsert_recursos(obtener_lote(lote))
        click.echo(f"[OK] Lote {lote}: " + _format_seed_summary(stats))

    @app.cli.command("seed:inicial")
    @click.option("--if-empty", "if_empty", is_flag=True, help="Solo si no hay usuarios cargados")
    def seed_inicial_cli(if_empty: bool) -> None:
        """Usuarios, tipos de actividad, obras y recursos base."""
        from services.seed_service import run_if_empty, seed_initial_data

        if if_empty:
            if not run_if_empty():
                click.echo("[INFO] La base ya tiene datos, seed omitido.")
                return
            click.echo("[OK] Datos iniciales cargados.")
            return

        resumen = seed_initial_data()
        click.echo(
            "[OK] Datos iniciales: usuarios={usuarios}, tipos_actividad={tipos}, obras={obras}".format(
                usuarios=resumen["usuarios"],
                tipos=resumen["tipos_actividad"],
                obras=resumen["obras"],
            )
        )
        click.echo("[OK] Recursos: " + _format_seed_summary(resumen["recursos"]))


def _register_blueprints(app: Flask) -> None:
    from blueprint_recursos import recursos_bp

    app.register_blueprint(recursos_bp)


def _register_routes(app: Flask) -> None:
    @app.route("/health")
    def health():
        try:
            db.session.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            app.logger.error("Health check: base de datos no disponible: %s", exc)
            return jsonify({"status": "error", "database": "unavailable"}), 503
        return jsonify({"status": "ok", "database": "ok"})


def create_app(
    config: Optional[AppConfig] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> Flask:
    app = Flask(__name__)

    if overrides:
        app.config.update(overrides)

    cfg = config or AppConfig()
    cfg.init_app(app)

    # Importa los modelos para que la metadata esté completa
    import models  # noqa: F401

    db.init_app(app)
    migrate.init_app(app, db, compare_type=True, directory=str(MIGRATIONS_DIR))

    if not app.config.get("TESTING"):
        from config.logging_config import setup_logging

        setup_logging(app)

    _register_seed_cli(app)
    _register_blueprints(app)
    _register_routes(app)

    return app


__all__ = ["create_app", "db", "migrate"]
