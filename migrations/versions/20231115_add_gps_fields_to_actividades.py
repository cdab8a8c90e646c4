"""add GPS start/end coordinates and km_recorridos to actividades"""

from __future__ import annotations

import logging

from alembic import op
import sqlalchemy as sa

revision = "202311150010"
down_revision = "202112200001"
branch_labels = None
depends_on = None

logger = logging.getLogger("alembic.runtime.migration")

GPS_INDEX = "IDX_ACTIVIDAD_GPS_INICIO"
GPS_FILTER = "latitud_inicio IS NOT NULL"

COLUMNAS_GPS = (
    ("latitud_inicio", sa.Numeric(10, 7), "GPS latitude at activity start"),
    ("longitud_inicio", sa.Numeric(10, 7), "GPS longitude at activity start"),
    ("latitud_fin", sa.Numeric(10, 7), "GPS latitude at activity end"),
    ("longitud_fin", sa.Numeric(10, 7), "GPS longitude at activity end"),
    ("km_recorridos", sa.Numeric(8, 2), "Kilometers traveled during activity (machinery)"),
)


def _columnas_actuales() -> set[str]:
    insp = sa.inspect(op.get_bind())
    return {c["name"] for c in insp.get_columns("actividades")}


def _indice_existe(nombre: str) -> bool:
    insp = sa.inspect(op.get_bind())
    return any(ix["name"] == nombre for ix in insp.get_indexes("actividades"))


def upgrade() -> None:
    existentes = _columnas_actuales()

    for nombre, tipo, comentario in COLUMNAS_GPS:
        if nombre in existentes:
            logger.info("[SKIP] Columna actividades.%s ya existe", nombre)
            continue
        op.add_column("actividades", sa.Column(nombre, tipo, nullable=True, comment=comentario))
        logger.info("[OK] Columna actividades.%s agregada", nombre)

    if _indice_existe(GPS_INDEX):
        logger.info("[SKIP] Índice %s ya existe", GPS_INDEX)
        return

    op.create_index(
        GPS_INDEX,
        "actividades",
        ["latitud_inicio", "longitud_inicio"],
        sqlite_where=sa.text(GPS_FILTER),
        mssql_where=sa.text(GPS_FILTER),
        postgresql_where=sa.text(GPS_FILTER),
    )
    logger.info("[OK] Índice %s creado", GPS_INDEX)


def downgrade() -> None:
    # El índice referencia latitud/longitud_inicio: se elimina antes
    if _indice_existe(GPS_INDEX):
        op.drop_index(GPS_INDEX, table_name="actividades")

    existentes = _columnas_actuales()
    for nombre, _tipo, _comentario in reversed(COLUMNAS_GPS):
        if nombre in existentes:
            op.drop_column("actividades", nombre)
