#!/usr/bin/env python3
"""
Inserta los recursos base con ``sqlcmd``
========================================
12 operarios y 7 máquinas en un INSERT por categoría, directo contra SQL
Server. La conexión se toma de ``SQLCMD_SERVER``, ``SQLCMD_DATABASE``,
``SQLCMD_USER`` y ``SQLCMD_PASSWORD`` (o ``.env``); sin usuario se usa
autenticación integrada.

Uso:
    python scripts/insert_recursos_sqlcmd.py
"""

import sys
import os
import logging

# Agregar el directorio raíz al path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from config.logging_config import setup_script_logging
from services.sqlcmd_runner import SqlcmdError, SqlcmdRunner, insertar_roster

logger = logging.getLogger('scripts.insert_recursos_sqlcmd')


def main(runner=None):
    setup_script_logging()
    runner = runner or SqlcmdRunner()

    logger.info("Iniciando inserción de recursos en SQL Server (%s/%s)...",
                runner.settings.server, runner.settings.database)
    try:
        resultado = insertar_roster(runner)
    except SqlcmdError as e:
        logger.error("Error durante la inserción: %s", e)
        logger.error("Algunos registros pueden existir ya (código duplicado)")
        return 1

    print("\n📊 Resumen:")
    print(f"- {resultado['operarios']} operarios insertados")
    print(f"- {resultado['maquinas']} máquinas insertadas")
    print(f"- Total: {resultado['total']} recursos")
    if resultado['por_tipo']:
        print("- Activos por tipo: " + "; ".join(resultado['por_tipo']))
    return 0


if __name__ == '__main__':
    sys.exit(main())
