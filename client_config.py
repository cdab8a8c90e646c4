"""Resolución de las URLs base de API y frontend desde ``config.json``.

El documento tiene la forma::

    {
        "current_environment": "development",
        "development": {
            "backend": {"protocol": "http", "host": "localhost", "port": 3002},
            "frontend": {"protocol": "http", "host": "localhost", "port": 8080}
        }
    }

Si no se puede leer o está mal formado se usan los valores por defecto y el
resultado lo indica (``DEFAULTED`` con el motivo).
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import requests

logger = logging.getLogger(__name__)

DEFAULT_ENVIRONMENT = "development"
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "config.json"

LOADED = "LOADED"
DEFAULTED = "DEFAULTED"


class ClientConfigError(ValueError):
    """El documento de configuración no tiene la forma esperada."""


@dataclass(frozen=True)
class Endpoint:
    protocol: str
    host: str
    port: int

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}:{self.port}"


def _join(base: str, path: str) -> str:
    if path.startswith("/"):
        path = path[1:]
    return f"{base}/{path}" if path else base


@dataclass(frozen=True)
class ClientConfig:
    environment: str = DEFAULT_ENVIRONMENT
    backend: Endpoint = field(default_factory=lambda: Endpoint("http", "localhost", 3002))
    frontend: Endpoint = field(default_factory=lambda: Endpoint("http", "localhost", 8080))

    @property
    def api_base(self) -> str:
        return self.backend.base_url

    @property
    def frontend_base(self) -> str:
        return self.frontend.base_url

    def api_url(self, endpoint: str = "") -> str:
        return _join(self.api_base, endpoint)

    def frontend_url(self, path: str = "") -> str:
        return _join(self.frontend_base, path)


DEFAULT_CLIENT_CONFIG = ClientConfig()


@dataclass(frozen=True)
class ConfigResolution:
    config: ClientConfig
    status: str
    reason: Optional[str] = None

    @property
    def defaulted(self) -> bool:
        return self.status == DEFAULTED


def _endpoint(env_config: Mapping[str, Any], name: str, environment: str) -> Endpoint:
    data = env_config.get(name)
    if not isinstance(data, Mapping):
        raise ClientConfigError(f"Missing '{name}' section in environment '{environment}'")

    faltantes = [key for key in ("protocol", "host", "port") if data.get(key) in (None, "")]
    if faltantes:
        raise ClientConfigError(
            f"'{environment}.{name}' is missing: {', '.join(faltantes)}"
        )

    try:
        port = int(data["port"])
    except (TypeError, ValueError) as exc:
        raise ClientConfigError(f"'{environment}.{name}.port' must be an integer") from exc

    return Endpoint(protocol=str(data["protocol"]), host=str(data["host"]), port=port)


def parse_client_config(document: Any) -> ClientConfig:
    if not isinstance(document, Mapping):
        raise ClientConfigError("Config document must be a JSON object")

    environment = document.get("current_environment") or DEFAULT_ENVIRONMENT
    if not isinstance(environment, str):
        raise ClientConfigError("'current_environment' must be a string")

    env_config = document.get(environment)
    if not isinstance(env_config, Mapping):
        raise ClientConfigError(f"Environment '{environment}' not found in config")

    return ClientConfig(
        environment=environment,
        backend=_endpoint(env_config, "backend", environment),
        frontend=_endpoint(env_config, "frontend", environment),
    )


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _fetch_document(source: str, session: Optional[requests.Session], timeout: float) -> Any:
    if _is_url(source):
        response = (session or requests).get(source, timeout=timeout)
        response.raise_for_status()
        return response.json()

    with open(source, encoding="utf-8") as handle:
        return json.load(handle)


def load_client_config(
    source: Union[str, os.PathLike, None] = None,
    session: Optional[requests.Session] = None,
    timeout: float = 5.0,
) -> ConfigResolution:
    """Lee la configuración en cada llamada; nunca lanza, informa el fallback.

    No hay caché: el llamador conserva la ``ConfigResolution`` devuelta.
    """
    if source is None:
        source = os.getenv("CONFIG_JSON") or DEFAULT_CONFIG_PATH
    source = os.fspath(source)

    try:
        config = parse_client_config(_fetch_document(source, session, timeout))
    except (requests.RequestException, OSError, ValueError) as exc:
        # ClientConfigError y JSONDecodeError son ValueError
        reason = f"{type(exc).__name__}: {exc}"
        logger.warning(
            "No se pudo cargar %s, usando configuración por defecto: %s", source, reason
        )
        return ConfigResolution(DEFAULT_CLIENT_CONFIG, DEFAULTED, reason)

    logger.info(
        "Configuración cargada: environment=%s api_base=%s frontend_base=%s",
        config.environment,
        config.api_base,
        config.frontend_base,
    )
    return ConfigResolution(config, LOADED)


def api_request(
    config: ClientConfig,
    endpoint: str,
    method: str = "GET",
    headers: Optional[Mapping[str, str]] = None,
    session: Optional[requests.Session] = None,
    **kwargs,
) -> requests.Response:
    """Petición contra la API con ``Content-Type: application/json`` por defecto.

    Devuelve la respuesta sea cual sea su estado; sólo los errores de
    transporte se registran y se propagan.
    """
    url = config.api_url(endpoint)
    merged = {"Content-Type": "application/json"}
    merged.update(headers or {})

    try:
        return (session or requests).request(method, url, headers=merged, **kwargs)
    except requests.RequestException:
        logger.error("Error en petición a %s", url, exc_info=True)
        raise
