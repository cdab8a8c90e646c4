"""
Base Service Class
==================
Clase base de los servicios del gestor de jornadas y excepciones comunes.
"""

from typing import TypeVar, Generic, Type, Optional, Any
from flask import current_app
from app.extensions import db
from sqlalchemy.exc import SQLAlchemyError


T = TypeVar('T')


class ServiceException(Exception):
    """Excepción base para errores de servicios"""
    def __init__(self, message: str, code: str = 'SERVICE_ERROR', details: Optional[dict] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(ServiceException):
    """Excepción para errores de validación"""
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message, code='VALIDATION_ERROR', details=details)


class ConflictException(ServiceException):
    """El registro choca con una clave única existente"""
    def __init__(self, resource: str, field: str, value: Any):
        message = f"{resource} con {field} '{value}' ya existe"
        super().__init__(message, code='CONFLICT', details={'resource': resource, field: value})


class BaseService(Generic[T]):
    """
    Servicio base: sesión y logging comunes.

    Las subclases definen ``model_class`` con el modelo SQLAlchemy.
    """

    model_class: Type[T] = None

    def __init__(self):
        if self.model_class is None:
            raise NotImplementedError("model_class debe estar definido en la subclase")

    def commit(self):
        """Commit explícito de la sesión"""
        try:
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            self._log_error(f"Error al guardar cambios: {e}")
            raise ServiceException(f"Error al guardar cambios: {str(e)}")

    # ===== Logging Helpers =====

    def _log_info(self, message: str):
        if current_app:
            current_app.logger.info(f"[{self.__class__.__name__}] {message}")

    def _log_error(self, message: str):
        if current_app:
            current_app.logger.error(f"[{self.__class__.__name__}] {message}")

    def _log_warning(self, message: str):
        if current_app:
            current_app.logger.warning(f"[{self.__class__.__name__}] {message}")
