"""
Models Package
==============
Modelos del gestor de jornadas.

Estructura:
- core: Usuario, Obra, Recurso, TipoActividad
- actividades: Actividad (jornada de un recurso en una obra)
"""

from app.extensions import db

from models.core import (
    Usuario,
    Obra,
    Recurso,
    TipoActividad,
)

from models.actividades import Actividad

__all__ = [
    'db',
    'Usuario',
    'Obra',
    'Recurso',
    'TipoActividad',
    'Actividad',
]
