"""Application configuration helpers and defaults.

Todo se lee del entorno (o de ``.env`` vía python-dotenv). Las credenciales
de SQL Server nunca viven en el código: los scripts de carga las toman de
``SQLCMD_*`` y la app de ``DATABASE_URL``.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from sqlalchemy.engine.url import make_url


load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent
DEFAULT_DATABASE_URL = f"sqlite:///{BASE_DIR / 'gestor_jornadas.db'}"
DEFAULT_ODBC_DRIVER = "ODBC Driver 18 for SQL Server"


class InvalidDatabaseURL(RuntimeError):
    """Raised when DATABASE_URL does not meet the expected requirements."""


def _normalize_db_url(raw_url: str) -> str:
    """Return a SQLAlchemy URL usable by the app.

    ``mssql://`` URLs are promoted to ``mssql+pyodbc://`` and receive an ODBC
    driver when none is given. SQLite is accepted for development and tests.
    """

    if not raw_url or not raw_url.strip():
        raise InvalidDatabaseURL("DATABASE_URL is required and must not be empty")

    candidate = raw_url.strip()
    try:
        url = make_url(candidate)
    except Exception as exc:  # pragma: no cover - formatting delegated to SQLAlchemy
        raise InvalidDatabaseURL(f"Invalid DATABASE_URL provided: {candidate!r}") from exc

    driver = url.drivername or ""
    if driver == "mssql":
        url = url.set(drivername="mssql+pyodbc")

    if url.drivername == "mssql+pyodbc" and "driver" not in url.query:
        url = url.update_query_dict(
            {"driver": os.getenv("DB_ODBC_DRIVER", DEFAULT_ODBC_DRIVER)}
        )

    return url.render_as_string(hide_password=False)


def _int_from_env(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {name} must be an integer") from exc


def _float_from_env(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise RuntimeError(f"Environment variable {name} must be a number") from exc


def _bool_from_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "t", "yes", "y", "on"}


@dataclass
class AppConfig:
    """Collection of configuration defaults applied to the Flask app."""

    database_url: str = field(
        default_factory=lambda: _normalize_db_url(os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL)
    )
    secret_key: str = field(
        default_factory=lambda: os.getenv("SECRET_KEY") or "dev-secret-key-change-me"
    )
    engine_options: Dict[str, Any] = field(
        default_factory=lambda: {
            "pool_size": _int_from_env("DB_POOL_SIZE", 10),
            "max_overflow": _int_from_env("DB_MAX_OVERFLOW", 5),
            "pool_recycle": _int_from_env("DB_POOL_RECYCLE", 1800),
            "pool_pre_ping": _bool_from_env("DB_POOL_PRE_PING", True),
        }
    )

    def init_app(self, app) -> None:
        app.secret_key = app.config.get("SECRET_KEY") or self.secret_key
        app.config.setdefault("SQLALCHEMY_DATABASE_URI", self.database_url)
        app.config.setdefault("SQLALCHEMY_TRACK_MODIFICATIONS", False)

        # El pool de SQLite no admite pool_size / max_overflow
        if not app.config["SQLALCHEMY_DATABASE_URI"].startswith("sqlite"):
            app.config.setdefault("SQLALCHEMY_ENGINE_OPTIONS", self.engine_options)


@dataclass(frozen=True)
class SqlcmdSettings:
    """Conexión del cliente de línea de comandos ``sqlcmd``."""

    server: str = "."
    database: str = "RP_GESTOR_JORNADAS"
    user: Optional[str] = None
    password: Optional[str] = None
    executable: str = "sqlcmd"

    @classmethod
    def from_env(cls) -> "SqlcmdSettings":
        return cls(
            server=os.getenv("SQLCMD_SERVER") or cls.server,
            database=os.getenv("SQLCMD_DATABASE") or cls.database,
            user=os.getenv("SQLCMD_USER") or None,
            password=os.getenv("SQLCMD_PASSWORD") or None,
            executable=os.getenv("SQLCMD_BIN") or cls.executable,
        )


@dataclass(frozen=True)
class ApiSeedSettings:
    """Destino y ritmo de la carga de recursos vía API."""

    base_url: str = "http://localhost:3002"
    delay: float = 0.2
    timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "ApiSeedSettings":
        return cls(
            base_url=(os.getenv("RECURSOS_API_BASE") or cls.base_url).rstrip("/"),
            delay=_float_from_env("SEED_REQUEST_DELAY", cls.delay),
            timeout=_float_from_env("SEED_REQUEST_TIMEOUT", cls.timeout),
        )


@dataclass(frozen=True)
class StaticServerSettings:
    root: Path = BASE_DIR / "frontend"
    port: int = 5173
    config_path: Optional[Path] = None

    @classmethod
    def from_env(cls) -> "StaticServerSettings":
        root = Path(os.getenv("STATIC_ROOT") or cls.root).resolve()
        config_json = os.getenv("CONFIG_JSON")
        return cls(
            root=root,
            port=_int_from_env("PORT", cls.port),
            config_path=Path(config_json).resolve() if config_json else None,
        )


__all__ = [
    "AppConfig",
    "ApiSeedSettings",
    "InvalidDatabaseURL",
    "SqlcmdSettings",
    "StaticServerSettings",
    "_normalize_db_url",
]
