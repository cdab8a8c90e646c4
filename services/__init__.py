"""
Services Package
================
Capa de servicios del gestor de jornadas.

Estructura:
-----------
- base: Clase base y excepciones
- recurso_service: Alta, consulta y upsert de recursos
- seed_service: Carga de datos iniciales
- sqlcmd_runner: Carga directa vía ``sqlcmd``
- recursos_api_client: Carga vía API HTTP

Uso:
----
    from services import RecursoService

    stats = RecursoService().upsert_recursos(ROSTER_BASE)
"""

from services.base import (
    BaseService,
    ServiceException,
    ValidationException,
    ConflictException,
)

from services.recurso_service import RecursoService

__all__ = [
    'BaseService',
    'ServiceException',
    'ValidationException',
    'ConflictException',
    'RecursoService',
]
