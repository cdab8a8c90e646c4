"""create initial tables: usuarios, obras, recursos, tipos_actividad, actividades"""

from __future__ import annotations

import logging

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import mssql

revision = "202112200001"
down_revision = None
branch_labels = None
depends_on = None

logger = logging.getLogger("alembic.runtime.migration")

ROLES_USUARIO = ("operario", "jefe_equipo", "tecnico_transporte", "administrador")
TIPOS_RECURSO = ("operario", "maquina")

# datetime2 en SQL Server, DATETIME genérico en el resto
FechaHora = sa.DateTime().with_variant(mssql.DATETIME2(), "mssql")


def _in_list(column: str, values) -> str:
    opciones = ", ".join(f"'{value}'" for value in values)
    return f"{column} IN ({opciones})"


def upgrade() -> None:
    op.create_table(
        "usuarios",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.Unicode(255), nullable=False),
        sa.Column("nombre", sa.Unicode(255), nullable=False),
        sa.Column("rol", sa.Unicode(20), nullable=False, server_default="operario"),
        sa.Column("activo", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("fecha_creacion", FechaHora, nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("PK_usuarios")),
        sa.UniqueConstraint("email", name=op.f("UQ_usuarios_email")),
        sa.CheckConstraint(_in_list("rol", ROLES_USUARIO), name=op.f("CK_usuarios_rol")),
    )

    op.create_table(
        "obras",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("codigo", sa.Unicode(50), nullable=False),
        sa.Column("descripcion", sa.Unicode(500), nullable=False),
        sa.Column("observaciones", sa.UnicodeText(), nullable=True),
        sa.Column("activo", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("fecha_creacion", FechaHora, nullable=False, server_default=sa.func.now()),
        sa.Column("fecha_actualizacion", FechaHora, nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("PK_obras")),
        sa.UniqueConstraint("codigo", name=op.f("UQ_obras_codigo")),
    )

    op.create_table(
        "recursos",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("codigo", sa.Unicode(50), nullable=False),
        sa.Column("nombre", sa.Unicode(255), nullable=False),
        sa.Column("tipo", sa.Unicode(20), nullable=False),
        sa.Column("activo", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("agrCoste", sa.Unicode(100), nullable=False),
        sa.Column("fecha_creacion", FechaHora, nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("PK_recursos")),
        sa.UniqueConstraint("codigo", name=op.f("UQ_recursos_codigo")),
        sa.CheckConstraint(_in_list("tipo", TIPOS_RECURSO), name=op.f("CK_recursos_tipo")),
    )

    op.create_table(
        "tipos_actividad",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("codigo", sa.Unicode(20), nullable=False),
        sa.Column("nombre", sa.Unicode(255), nullable=False),
        sa.Column("descripcion", sa.UnicodeText(), nullable=True),
        sa.Column("fecha_creacion", FechaHora, nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("PK_tipos_actividad")),
        sa.UniqueConstraint("codigo", name=op.f("UQ_tipos_actividad_codigo")),
    )

    # Los campos GPS llegan en la revisión 202311150010
    op.create_table(
        "actividades",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("obra_id", sa.Integer(), nullable=False),
        sa.Column("recurso_id", sa.Integer(), nullable=False),
        sa.Column("tipo_actividad_id", sa.Integer(), nullable=False),
        sa.Column("fecha_inicio", sa.Date(), nullable=False),
        sa.Column("hora_inicio", sa.Time(), nullable=False),
        sa.Column("fecha_fin", sa.Date(), nullable=True),
        sa.Column("hora_fin", sa.Time(), nullable=True),
        sa.Column("observaciones", sa.UnicodeText(), nullable=True),
        sa.Column("usuario_creacion", sa.Integer(), nullable=False),
        sa.Column("fecha_creacion", FechaHora, nullable=False, server_default=sa.func.now()),
        sa.Column("usuario_modificacion", sa.Integer(), nullable=True),
        sa.Column("fecha_modificacion", FechaHora, nullable=False, server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("PK_actividades")),
        sa.ForeignKeyConstraint(["obra_id"], ["obras.id"], name=op.f("FK_actividades_obra")),
        sa.ForeignKeyConstraint(["recurso_id"], ["recursos.id"], name=op.f("FK_actividades_recurso")),
        sa.ForeignKeyConstraint(
            ["tipo_actividad_id"], ["tipos_actividad.id"], name=op.f("FK_actividades_tipo")
        ),
        sa.ForeignKeyConstraint(
            ["usuario_creacion"], ["usuarios.id"], name=op.f("FK_actividades_usuario_creacion")
        ),
        sa.ForeignKeyConstraint(
            ["usuario_modificacion"], ["usuarios.id"], name=op.f("FK_actividades_usuario_modificacion")
        ),
    )

    op.create_index("IDX_OBRA_CODIGO", "obras", ["codigo"])
    op.create_index("IDX_RECURSO_CODIGO", "recursos", ["codigo"])
    op.create_index("IDX_TIPO_ACTIVIDAD_CODIGO", "tipos_actividad", ["codigo"])
    op.create_index(
        "IDX_ACTIVIDAD_RECURSO_FECHA",
        "actividades",
        ["recurso_id", "fecha_inicio", "hora_inicio"],
    )
    op.create_index("IDX_ACTIVIDAD_OBRA_FECHA", "actividades", ["obra_id", "fecha_inicio"])

    logger.info("[OK] Tablas iniciales creadas")


def downgrade() -> None:
    # Hijas antes que padres por las claves foráneas
    op.drop_table("actividades")
    op.drop_table("tipos_actividad")
    op.drop_table("recursos")
    op.drop_table("obras")
    op.drop_table("usuarios")

    logger.info("[OK] Tablas iniciales eliminadas")
