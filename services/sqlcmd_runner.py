"""Carga de recursos ejecutando ``sqlcmd`` directamente contra SQL Server.

Variante sin ORM: construye los INSERT como texto y los pasa al cliente de
línea de comandos. No evita claves duplicadas, las reporta.
"""

from __future__ import annotations

import logging
import os
import subprocess
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from app.config import SqlcmdSettings
from datos_iniciales import MAQUINAS, OPERARIOS

logger = logging.getLogger(__name__)

COLUMNAS_RECURSO = ("codigo", "nombre", "tipo", "activo", "agrCoste")


class SqlcmdError(RuntimeError):
    """``sqlcmd`` no pudo lanzarse o terminó con código distinto de cero."""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


def _literal(value) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if value is None:
        return "NULL"
    texto = str(value).replace("'", "''")
    return f"N'{texto}'"


def build_insert_recursos(recursos: Sequence[dict]) -> str:
    """Un único INSERT multi-fila para ``recursos``."""
    if not recursos:
        raise ValueError("No hay recursos para insertar")

    filas = [
        "(" + ", ".join(_literal(recurso[columna]) for columna in COLUMNAS_RECURSO) + ")"
        for recurso in recursos
    ]
    return (
        f"INSERT INTO recursos ({', '.join(COLUMNAS_RECURSO)}) "
        f"VALUES {', '.join(filas)}"
    )


def limpiar_salida(stdout: str) -> List[str]:
    """Quita líneas vacías y los avisos ``(N rows affected)``."""
    return [
        linea.strip()
        for linea in (stdout or "").splitlines()
        if linea.strip() and "rows affected" not in linea
    ]


class SqlcmdRunner:
    """Ejecuta consultas con ``sqlcmd -Q`` y devuelve las líneas de resultado."""

    def __init__(self, settings: Optional[SqlcmdSettings] = None, run: Callable = subprocess.run):
        self.settings = settings or SqlcmdSettings.from_env()
        self._run = run

    def _argv(self, query: str) -> List[str]:
        s = self.settings
        argv = [s.executable, "-S", s.server, "-d", s.database]
        if s.user:
            argv += ["-U", s.user]
        else:
            argv.append("-E")
        # -b: los errores de SQL devuelven código de salida distinto de cero
        argv += ["-b", "-Q", query, "-h", "-1", "-W"]
        return argv

    def _env(self) -> Optional[Dict[str, str]]:
        if not self.settings.password:
            return None
        env = dict(os.environ)
        env["SQLCMDPASSWORD"] = self.settings.password
        return env

    def execute(self, query: str) -> List[str]:
        logger.info("Ejecutando SQL: %s...", query[:100])
        try:
            result = self._run(
                self._argv(query),
                capture_output=True,
                text=True,
                env=self._env(),
                check=False,
            )
        except OSError as exc:
            raise SqlcmdError(f"No se pudo ejecutar {self.settings.executable}: {exc}") from exc

        if result.stderr and result.stderr.strip():
            logger.warning("SQL Warning: %s", result.stderr.strip())

        if result.returncode != 0:
            detalle = (result.stderr or result.stdout or "").strip()
            raise SqlcmdError(
                f"Error SQL (código {result.returncode}): {detalle}",
                returncode=result.returncode,
                stderr=result.stderr or "",
            )

        lineas = limpiar_salida(result.stdout)
        if lineas:
            logger.info("Resultado SQL: %s", lineas)
        else:
            logger.info("SQL ejecutado exitosamente")
        return lineas


def insertar_roster(
    runner: SqlcmdRunner,
    operarios: Iterable[dict] = OPERARIOS,
    maquinas: Iterable[dict] = MAQUINAS,
) -> Dict[str, object]:
    """Secuencia completa: versión, conteo, inserción por categoría y verificación.

    La primera ``SqlcmdError`` corta la secuencia y se propaga.
    """
    operarios = list(operarios)
    maquinas = list(maquinas)

    runner.execute("SELECT @@VERSION")
    antes = runner.execute("SELECT COUNT(*) as total FROM recursos WHERE activo = 1")

    logger.info("Insertando %d operarios...", len(operarios))
    runner.execute(build_insert_recursos(operarios))

    logger.info("Insertando %d máquinas...", len(maquinas))
    runner.execute(build_insert_recursos(maquinas))

    despues = runner.execute("SELECT COUNT(*) as total_recursos FROM recursos WHERE activo = 1")
    por_tipo = runner.execute(
        "SELECT tipo, COUNT(*) as cantidad FROM recursos WHERE activo = 1 GROUP BY tipo"
    )

    return {
        "operarios": len(operarios),
        "maquinas": len(maquinas),
        "total": len(operarios) + len(maquinas),
        "activos_antes": antes,
        "activos_despues": despues,
        "por_tipo": por_tipo,
    }
