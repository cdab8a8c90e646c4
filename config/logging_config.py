import logging
import os
import sys
from logging.handlers import RotatingFileHandler


LOG_FORMAT = '[%(asctime)s] %(levelname)s in %(module)s: %(message)s'
MAX_BYTES = 10485760  # 10MB


def _log_dir(default_root):
    return os.environ.get('LOG_DIR') or os.path.join(default_root, 'logs')


def setup_logging(app):
    """Configura logging a archivo para la aplicacion Flask"""

    log_dir = _log_dir(os.path.dirname(app.root_path))
    os.makedirs(log_dir, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT)

    # Handler para archivo general de aplicacion
    file_handler = RotatingFileHandler(
        os.path.join(log_dir, 'app.log'),
        maxBytes=MAX_BYTES,
        backupCount=10
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.INFO)

    # Handler para errores
    error_handler = RotatingFileHandler(
        os.path.join(log_dir, 'errors.log'),
        maxBytes=MAX_BYTES,
        backupCount=10
    )
    error_handler.setFormatter(formatter)
    error_handler.setLevel(logging.ERROR)

    app.logger.addHandler(file_handler)
    app.logger.addHandler(error_handler)
    app.logger.setLevel(logging.INFO)

    # Los servicios loguean con getLogger(__name__); comparten los archivos
    for name in ('services', 'client_config', 'static_server'):
        module_logger = logging.getLogger(name)
        module_logger.addHandler(file_handler)
        module_logger.addHandler(error_handler)
        module_logger.setLevel(logging.INFO)

    app.logger.info('Sistema de logging configurado correctamente')
    app.logger.info(f'Logs guardados en: {log_dir}')


def setup_script_logging(level=logging.INFO):
    """Logging a consola para los scripts de carga y migracion"""

    root = logging.getLogger()
    if any(getattr(h, '_gestor_jornadas', False) for h in root.handlers):
        return root

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter('%(levelname)s %(name)s: %(message)s'))
    handler._gestor_jornadas = True
    root.addHandler(handler)
    root.setLevel(level)
    return root
