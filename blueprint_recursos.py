"""
Blueprint de Recursos - consulta y alta de operarios y máquinas
"""
from datetime import datetime, timezone

from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from services.base import ConflictException, ServiceException, ValidationException
from services.recurso_service import RecursoService

recursos_bp = Blueprint('recursos', __name__, url_prefix='/recursos')

TRUTHY = {'1', 'true', 'si', 'sí', 'yes'}


def _error(message, status):
    return jsonify({
        'error': message,
        'timestamp': datetime.now(timezone.utc).isoformat(),
    }), status


@recursos_bp.route('', methods=['GET'])
def lista():
    """Recursos activos ordenados por tipo y código"""
    try:
        incluir_inactivos = request.args.get('todos', '').strip().lower() in TRUTHY
        tipo = request.args.get('tipo', '').strip() or None

        recursos = RecursoService().listar(incluir_inactivos=incluir_inactivos, tipo=tipo)
        return jsonify([recurso.to_dict() for recurso in recursos])

    except ServiceException as e:
        current_app.logger.error(f"Error en recursos.lista: {e.message}", exc_info=True)
        return _error('Error al obtener recursos', 500)
    except SQLAlchemyError as e:
        current_app.logger.error(f"Error de base de datos en recursos.lista: {e}", exc_info=True)
        return _error('Error al obtener recursos', 500)


@recursos_bp.route('', methods=['POST'])
def crear():
    data = request.get_json(silent=True)
    if data is None:
        return _error('El cuerpo debe ser JSON válido', 400)

    try:
        recurso = RecursoService().crear(data)
    except ValidationException as e:
        current_app.logger.warning(f"Recurso inválido: {e.message}")
        return _error(e.message, 400)
    except ConflictException as e:
        current_app.logger.warning(f"Recurso duplicado: {e.message}")
        return _error(e.message, 409)
    except ServiceException as e:
        current_app.logger.error(f"Error en recursos.crear: {e.message}", exc_info=True)
        return _error('Error al crear recurso', 500)
    except SQLAlchemyError as e:
        current_app.logger.error(f"Error de base de datos en recursos.crear: {e}", exc_info=True)
        return _error('Error al crear recurso', 500)

    return jsonify({
        'message': f'Recurso {recurso.codigo} creado correctamente',
        'recurso': recurso.to_dict(),
    }), 201
