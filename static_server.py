"""Servidor estático del frontend (SPA).

- ``/`` sirve ``index.html``; las rutas inexistentes también (fallback SPA).
- ``/config.json`` se lee un directorio por encima de la raíz: es la única
  salida permitida. Cualquier otra ruta fuera de la raíz responde 403.
- CORS abierto en todas las respuestas; ``OPTIONS`` responde 200 vacío.

Uso::

    STATIC_ROOT=frontend PORT=5173 python static_server.py
"""
from __future__ import annotations

import errno
import logging
import os
from pathlib import Path
from typing import Optional

from flask import Flask, Response, request
from werkzeug.security import safe_join

from app.config import StaticServerSettings
from client_config import load_client_config

logger = logging.getLogger(__name__)

MIME_TYPES = {
    '.html': 'text/html',
    '.js': 'text/javascript',
    '.css': 'text/css',
    '.json': 'application/json',
    '.png': 'image/png',
    '.jpg': 'image/jpeg',
    '.gif': 'image/gif',
    '.svg': 'image/svg+xml',
    '.ico': 'image/x-icon',
    '.tsx': 'text/javascript',
    '.ts': 'text/javascript',
}
DEFAULT_MIME_TYPE = 'application/octet-stream'

CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Methods': 'GET, POST, PUT, DELETE, OPTIONS',
    'Access-Control-Allow-Headers': 'Content-Type, Authorization',
}

INDEX_DOCUMENT = 'index.html'
CONFIG_DOCUMENT = 'config.json'
DEFAULT_BACKEND_PORT = 3002

SERVED_METHODS = ['GET', 'HEAD', 'POST', 'PUT', 'DELETE', 'PATCH', 'OPTIONS']


class ForbiddenPath(Exception):
    """La ruta pedida resuelve fuera de la raíz servida."""


def content_type_for(path) -> str:
    return MIME_TYPES.get(Path(path).suffix.lower(), DEFAULT_MIME_TYPE)


def _error_code(exc: OSError) -> str:
    return errno.errorcode.get(exc.errno, type(exc).__name__) if exc.errno else type(exc).__name__


def _is_within(path: str, root: str) -> bool:
    return os.path.commonpath([path, root]) == root


class StaticSite:
    """Resuelve rutas URL a archivos bajo ``root``."""

    def __init__(self, root, config_path=None):
        self.root = os.path.realpath(root)
        self.config_path = os.path.abspath(
            config_path or os.path.join(os.path.dirname(self.root), CONFIG_DOCUMENT)
        )

    def resolve(self, url_path: str) -> str:
        relative = url_path.lstrip('/') or INDEX_DOCUMENT
        if relative == CONFIG_DOCUMENT:
            return self.config_path

        joined = safe_join(self.root, relative)
        if joined is None:
            raise ForbiddenPath(url_path)

        # Un symlink dentro de la raíz puede apuntar fuera de ella
        real = os.path.realpath(joined)
        if not _is_within(real, self.root):
            raise ForbiddenPath(url_path)
        return real

    def read(self, path: str) -> bytes:
        with open(path, 'rb') as handle:
            return handle.read()

    @property
    def index_path(self) -> str:
        return os.path.join(self.root, INDEX_DOCUMENT)


def resolve_backend_port(config_path) -> int:
    resolution = load_client_config(config_path)
    if resolution.defaulted:
        logger.warning('No se pudo leer %s, usando puerto backend por defecto', config_path)
        return DEFAULT_BACKEND_PORT
    return resolution.config.backend.port


def create_static_app(root=None, config_path=None) -> Flask:
    if root is None or config_path is None:
        settings = StaticServerSettings.from_env()
        root = root or settings.root
        config_path = config_path or settings.config_path
    site = StaticSite(root, config_path)

    app = Flask(__name__, static_folder=None)
    app.config['STATIC_SITE'] = site
    app.config['BACKEND_PORT'] = resolve_backend_port(site.config_path)

    @app.after_request
    def add_cors_headers(response):
        for header, value in CORS_HEADERS.items():
            response.headers[header] = value
        return response

    def _server_error(exc: OSError) -> Response:
        logger.error('Error leyendo archivo: %s', exc)
        return Response(f'Server Error: {_error_code(exc)}', status=500, content_type='text/plain')

    def _spa_fallback() -> Response:
        try:
            body = site.read(site.index_path)
        except OSError as exc:
            return _server_error(exc)
        return Response(body, status=200, content_type='text/html')

    def serve(path=''):
        if request.method == 'OPTIONS':
            return Response(status=200)

        try:
            target = site.resolve(path)
        except ForbiddenPath:
            logger.warning('Ruta fuera de la raíz rechazada: %s', path)
            return Response('Forbidden', status=403, content_type='text/plain')

        try:
            body = site.read(target)
        except FileNotFoundError:
            return _spa_fallback()
        except OSError as exc:
            return _server_error(exc)

        return Response(body, status=200, content_type=content_type_for(target))

    app.add_url_rule(
        '/', 'serve_root', serve, methods=SERVED_METHODS, provide_automatic_options=False
    )
    app.add_url_rule(
        '/<path:path>', 'serve_path', serve, methods=SERVED_METHODS,
        provide_automatic_options=False,
    )

    logger.info('Sirviendo archivos desde: %s', site.root)
    logger.info('API Backend: http://localhost:%s', app.config['BACKEND_PORT'])
    return app


def main() -> None:
    from config.logging_config import setup_script_logging

    setup_script_logging()
    settings = StaticServerSettings.from_env()
    app = create_static_app(settings.root, settings.config_path)

    logger.info('Frontend server ejecutándose en puerto %s', settings.port)
    logger.info('URL: http://localhost:%s', settings.port)
    app.run(host='0.0.0.0', port=settings.port)


if __name__ == '__main__':
    main()
