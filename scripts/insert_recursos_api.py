#!/usr/bin/env python3
"""
Inserta recursos a través de la API
===================================
Un ``POST /recursos`` por registro, con pausa fija entre peticiones. Los
errores (duplicados incluidos) se cuentan y se informan, no se reintentan.

Uso:
    python scripts/insert_recursos_api.py [--lote base|ampliacion-maquinas]

Destino: ``RECURSOS_API_BASE`` (por defecto http://localhost:3002).
"""

import sys
import os
import argparse
import logging

# Agregar el directorio raíz al path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from app.config import ApiSeedSettings
from config.logging_config import setup_script_logging
from datos_iniciales import LOTE_POR_DEFECTO, LOTES, obtener_lote
from services.recursos_api_client import (
    RecursosApiClient,
    RecursosApiError,
    insertar_via_api,
    resumir_por_tipo,
)

logger = logging.getLogger('scripts.insert_recursos_api')


def main(argv=None, client=None, sleep=None):
    parser = argparse.ArgumentParser(description='Inserta recursos vía API HTTP')
    parser.add_argument('--lote', default=LOTE_POR_DEFECTO, choices=sorted(LOTES),
                        help='Lote de recursos a insertar')
    args = parser.parse_args(argv)

    setup_script_logging()
    settings = ApiSeedSettings.from_env()
    client = client or RecursosApiClient(settings.base_url, timeout=settings.timeout)

    logger.info("Iniciando inserción de recursos via API en %s...", client.base_url)
    kwargs = {'delay': settings.delay}
    if sleep is not None:
        kwargs['sleep'] = sleep
    informe = insertar_via_api(client, obtener_lote(args.lote), **kwargs)

    print("\n📋 Resumen de inserción:")
    print(f"✅ Exitosos: {informe.exitosos}")
    print(f"❌ Errores: {informe.errores}")
    print(f"📊 Total: {informe.total}")
    if informe.fallidos:
        print(f"   Fallidos: {', '.join(informe.fallidos)}")

    if informe.exitosos > 0:
        try:
            recursos = client.listar()
        except RecursosApiError as e:
            logger.error("Error al verificar recursos: %s", e)
        else:
            conteo = resumir_por_tipo(recursos)
            print(f"\n📊 Total recursos en base de datos: {len(recursos)}")
            print(f"👤 Operarios: {conteo['operario']}")
            print(f"🚜 Máquinas: {conteo['maquina']}")

    return 0 if informe.errores == 0 else 1


if __name__ == '__main__':
    sys.exit(main())
