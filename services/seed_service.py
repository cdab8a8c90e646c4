"""Carga de datos iniciales: usuarios, tipos de actividad, obras y recursos.

Idempotente: cada registro se busca por su clave única (email o código) y
sólo se inserta si falta. Puede ejecutarse tantas veces como se quiera.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Type

from app.extensions import db
from datos_iniciales import (
    OBRAS_INICIALES,
    ROSTER_BASE,
    TIPOS_ACTIVIDAD,
    USUARIOS_INICIALES,
)
from models import Obra, TipoActividad, Usuario
from services.recurso_service import RecursoService

logger = logging.getLogger(__name__)


def _insertar_faltantes(model: Type[db.Model], clave: str, registros: Iterable[dict]) -> int:
    existentes = {valor for (valor,) in db.session.query(getattr(model, clave)).all()}
    creados = 0
    for datos in registros:
        if datos[clave] in existentes:
            continue
        db.session.add(model(**datos))
        existentes.add(datos[clave])
        creados += 1
        logger.info("%s creado: %s", model.__name__, datos[clave])
    return creados


def seed_initial_data() -> Dict[str, object]:
    """Siembra el catálogo inicial completo y devuelve un resumen por tabla."""
    resumen: Dict[str, object] = {
        "usuarios": _insertar_faltantes(Usuario, "email", USUARIOS_INICIALES),
        "tipos_actividad": _insertar_faltantes(TipoActividad, "codigo", TIPOS_ACTIVIDAD),
        "obras": _insertar_faltantes(Obra, "codigo", OBRAS_INICIALES),
    }
    db.session.commit()

    resumen["recursos"] = RecursoService().upsert_recursos(ROSTER_BASE)
    logger.info("Datos iniciales cargados: %s", resumen)
    return resumen


def run_if_empty() -> bool:
    """Ejecuta el seeding sólo si la tabla ``usuarios`` está vacía."""
    if db.session.query(Usuario.id).first() is not None:
        logger.info("La base ya tiene usuarios, seeding omitido")
        return False

    seed_initial_data()
    return True
