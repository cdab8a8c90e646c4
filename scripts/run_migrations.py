#!/usr/bin/env python3
"""
Ejecuta las migraciones del esquema
===================================
Aplica (o revierte) las revisiones de ``migrations/versions`` en orden.

Uso:
    python scripts/run_migrations.py                  # hasta head
    python scripts/run_migrations.py --revision 202311150010
    python scripts/run_migrations.py --downgrade --revision base
"""

import sys
import os
import argparse
import logging

# Agregar el directorio raíz al path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from flask_migrate import downgrade, upgrade

from app import create_app
from config.logging_config import setup_script_logging

logger = logging.getLogger('scripts.run_migrations')


def run(revision, revert=False, app=None):
    app = app or create_app()
    with app.app_context():
        if revert:
            logger.info("Revirtiendo migraciones hasta %s...", revision)
            downgrade(revision=revision)
        else:
            logger.info("Aplicando migraciones hasta %s...", revision)
            upgrade(revision=revision)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Ejecuta las migraciones de base de datos')
    parser.add_argument('--revision', default=None,
                        help='Revisión destino (por defecto head; con --downgrade, -1)')
    parser.add_argument('--downgrade', action='store_true',
                        help='Revierte en lugar de aplicar')
    args = parser.parse_args(argv)

    setup_script_logging()
    revision = args.revision or ('-1' if args.downgrade else 'head')

    logger.info("Iniciando migraciones...")
    try:
        run(revision, revert=args.downgrade)
    except Exception:
        logger.exception("Error ejecutando migraciones")
        return 1

    logger.info("Migraciones completadas exitosamente")
    return 0


if __name__ == '__main__':
    sys.exit(main())
