"""add performance indexes for dashboard, export and sync queries"""

from __future__ import annotations

import logging
from typing import NamedTuple, Optional, Sequence

from alembic import op
import sqlalchemy as sa

revision = "202311150011"
down_revision = "202311150010"
branch_labels = None
depends_on = None

logger = logging.getLogger("alembic.runtime.migration")


class Indice(NamedTuple):
    nombre: str
    tabla: str
    columnas: Sequence[str]
    filtro: Optional[str] = None
    # SQL Server no admite OR en índices filtrados
    filtro_mssql: Optional[str] = None
    incluir: Sequence[str] = ()


INDICES = (
    Indice("IDX_EXPORT_LOG_USER_DATE", "export_logs", ("usuarioId", "fecha_creacion")),
    Indice(
        "IDX_EXPORT_LOG_STATUS_FORMAT",
        "export_logs",
        ("status", "format"),
        filtro="status = 'completed'",
    ),
    Indice(
        "IDX_ACTIVIDAD_FECHA_OBRA_RECURSO",
        "actividades",
        ("fecha_inicio", "obra_id", "recurso_id"),
    ),
    Indice("IDX_ACTIVIDAD_USER_FECHA", "actividades", ("usuario_creacion", "fecha_inicio")),
    Indice(
        "IDX_ACTIVIDAD_RECURSO_TIPO_FECHA",
        "actividades",
        ("recurso_id", "tipo_actividad_id", "fecha_inicio"),
    ),
    Indice(
        "IDX_SYNC_LOG_TYPE_STATUS_DATE",
        "sync_logs",
        ("type", "status", "fecha_creacion"),
    ),
    Indice("IDX_OBRA_ACTIVO_CODIGO", "obras", ("activo", "codigo"), filtro="activo = 1"),
    Indice("IDX_RECURSO_ACTIVO_TIPO", "recursos", ("activo", "tipo"), filtro="activo = 1"),
    Indice(
        "IDX_RECURSO_EMPRESA_TIPO",
        "recursos",
        ("empresa", "tipo"),
        filtro="empresa IS NOT NULL",
    ),
    Indice(
        "IDX_ACTIVIDAD_FECHA_STATUS",
        "actividades",
        ("fecha_inicio", "fecha_fin", "hora_fin"),
        filtro="fecha_fin IS NULL OR hora_fin IS NULL",
        filtro_mssql="fecha_fin IS NULL",
    ),
    Indice("IDX_USUARIO_ACTIVO_ROL", "usuarios", ("activo", "rol"), filtro="activo = 1"),
    Indice(
        "IDX_ACTIVIDAD_EXPORT_COMPOSITE",
        "actividades",
        ("fecha_inicio", "recurso_id", "obra_id"),
        incluir=("tipo_actividad_id", "hora_inicio", "fecha_fin", "hora_fin", "km_recorridos"),
    ),
)


def _dialect_kwargs(indice: Indice) -> dict:
    kwargs = {}
    if indice.filtro:
        kwargs["sqlite_where"] = sa.text(indice.filtro)
        kwargs["postgresql_where"] = sa.text(indice.filtro)
        kwargs["mssql_where"] = sa.text(indice.filtro_mssql or indice.filtro)
    if indice.incluir:
        kwargs["mssql_include"] = list(indice.incluir)
        kwargs["postgresql_include"] = list(indice.incluir)
    return kwargs


def _motivo_para_omitir(insp, indice: Indice) -> Optional[str]:
    if not insp.has_table(indice.tabla):
        return f"tabla {indice.tabla} no existe"

    columnas = {c["name"] for c in insp.get_columns(indice.tabla)}
    faltantes = [c for c in (*indice.columnas, *indice.incluir) if c not in columnas]
    if faltantes:
        return f"columnas ausentes en {indice.tabla}: {', '.join(faltantes)}"

    if any(ix["name"] == indice.nombre for ix in insp.get_indexes(indice.tabla)):
        return "ya existe"

    return None


def upgrade() -> None:
    logger.info("[MIGRATION] Creando índices de performance...")

    for indice in INDICES:
        insp = sa.inspect(op.get_bind())
        motivo = _motivo_para_omitir(insp, indice)
        if motivo:
            logger.info("[SKIP] Índice %s: %s", indice.nombre, motivo)
            continue

        op.create_index(indice.nombre, indice.tabla, list(indice.columnas), **_dialect_kwargs(indice))
        logger.info("[OK] Índice %s creado en %s", indice.nombre, indice.tabla)


def downgrade() -> None:
    for indice in reversed(INDICES):
        insp = sa.inspect(op.get_bind())
        if not insp.has_table(indice.tabla):
            continue
        if any(ix["name"] == indice.nombre for ix in insp.get_indexes(indice.tabla)):
            op.drop_index(indice.nombre, table_name=indice.tabla)
            logger.info("[OK] Índice %s eliminado", indice.nombre)
