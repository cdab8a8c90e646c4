"""Carga de recursos a través de la API HTTP (``POST /recursos``).

Secuencial, una petición por recurso con una pausa fija entre cada una. Un
fallo no corta el bucle ni se reintenta; se cuenta y se informa.
"""

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional

import requests

from app.config import ApiSeedSettings

logger = logging.getLogger(__name__)

CAMPOS_PAYLOAD = ("codigo", "nombre", "tipo", "activo", "agrCoste")


class RecursosApiError(RuntimeError):
    """Respuesta no 2xx o error de transporte contra la API de recursos."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


@dataclass
class InformeInsercion:
    total: int = 0
    exitosos: int = 0
    errores: int = 0
    fallidos: List[str] = field(default_factory=list)


class RecursosApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        settings = ApiSeedSettings.from_env()
        self.base_url = (base_url or settings.base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.timeout
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _send(self, method: str, path: str, **kwargs) -> requests.Response:
        try:
            response = self.session.request(method, self._url(path), timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise RecursosApiError(f"Error de conexión: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise RecursosApiError(
                f"HTTP {response.status_code}: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )
        return response

    def crear(self, recurso: dict) -> dict:
        faltantes = [campo for campo in CAMPOS_PAYLOAD if campo not in recurso]
        if faltantes:
            raise RecursosApiError(f"Faltan campos: {', '.join(faltantes)}")

        payload = {campo: recurso[campo] for campo in CAMPOS_PAYLOAD}
        response = self._send("POST", "/recursos", json=payload)
        try:
            return response.json()
        except ValueError:
            return {}

    def listar(self) -> List[dict]:
        response = self._send("GET", "/recursos")
        try:
            data = response.json()
        except ValueError as exc:
            raise RecursosApiError("Respuesta de /recursos no es JSON", body=response.text) from exc
        if not isinstance(data, list):
            raise RecursosApiError("Se esperaba una lista de recursos", body=response.text)
        return data


def insertar_via_api(
    client: RecursosApiClient,
    recursos: Iterable[dict],
    delay: float = 0.2,
    sleep: Callable[[float], None] = time.sleep,
) -> InformeInsercion:
    """Envía cada recurso por separado y cuenta éxitos y fallos."""
    recursos = list(recursos)
    informe = InformeInsercion(total=len(recursos))
    logger.info("Total recursos a insertar: %d", informe.total)

    for recurso in recursos:
        try:
            client.crear(recurso)
        except RecursosApiError as exc:
            codigo = recurso.get("codigo", "?")
            informe.errores += 1
            informe.fallidos.append(codigo)
            logger.warning("Error %s: %s", codigo, exc)
        else:
            informe.exitosos += 1
            logger.info("%s - %s insertado", recurso["codigo"], recurso["nombre"])

        sleep(delay)

    logger.info(
        "Resumen de inserción: %d exitosos, %d errores, %d total",
        informe.exitosos,
        informe.errores,
        informe.total,
    )
    return informe


def resumir_por_tipo(recursos: Iterable[dict]) -> Dict[str, int]:
    conteo = Counter(recurso.get("tipo") for recurso in recursos)
    return {"operario": conteo.get("operario", 0), "maquina": conteo.get("maquina", 0)}
