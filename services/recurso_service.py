"""
Recurso Service
===============
Alta, consulta y carga idempotente de recursos (operarios y máquinas).
"""

from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.extensions import db
from models import Recurso
from services.base import (
    BaseService,
    ConflictException,
    ServiceException,
    ValidationException,
)


CAMPOS_OBLIGATORIOS = ('codigo', 'nombre', 'tipo', 'agrCoste')
CAMPOS_ACTUALIZABLES = ('nombre', 'tipo', 'activo', 'agr_coste')


class RecursoService(BaseService[Recurso]):
    """Operaciones sobre la tabla ``recursos``."""

    model_class = Recurso

    def listar(self, incluir_inactivos: bool = False, tipo: Optional[str] = None) -> List[Recurso]:
        query = Recurso.query
        if not incluir_inactivos:
            query = query.filter(Recurso.activo.is_(True))
        if tipo:
            query = query.filter(Recurso.tipo == tipo)
        try:
            return query.order_by(Recurso.tipo, Recurso.codigo).all()
        except SQLAlchemyError as e:
            db.session.rollback()
            self._log_error(f"Error listando recursos: {e}")
            raise ServiceException(f"Error al listar Recurso: {str(e)}")

    def get_by_codigo(self, codigo: str) -> Optional[Recurso]:
        return Recurso.query.filter_by(codigo=codigo).first()

    def validar(self, data) -> Dict:
        """Normaliza y valida un payload ``{codigo, nombre, tipo, activo, agrCoste}``."""
        if not isinstance(data, dict):
            raise ValidationException('Se esperaba un objeto JSON')

        if 'agrCoste' not in data and 'agr_coste' in data:
            data = dict(data, agrCoste=data['agr_coste'])

        faltantes = [
            campo for campo in CAMPOS_OBLIGATORIOS
            if not str(data.get(campo) or '').strip()
        ]
        if faltantes:
            raise ValidationException(
                f"Campos obligatorios ausentes: {', '.join(faltantes)}",
                details={'faltantes': faltantes},
            )

        tipo = str(data['tipo']).strip()
        if tipo not in Recurso.TIPOS:
            raise ValidationException(
                f"Tipo de recurso inválido: {tipo}",
                details={'tipos_validos': list(Recurso.TIPOS)},
            )

        activo = data.get('activo', True)
        if not isinstance(activo, bool):
            raise ValidationException('El campo activo debe ser booleano')

        return {
            'codigo': str(data['codigo']).strip(),
            'nombre': str(data['nombre']).strip(),
            'tipo': tipo,
            'activo': activo,
            'agr_coste': str(data['agrCoste']).strip(),
        }

    def crear(self, data) -> Recurso:
        """Crea un recurso; ``ConflictException`` si el código ya existe."""
        campos = self.validar(data)

        if self.get_by_codigo(campos['codigo']) is not None:
            raise ConflictException('Recurso', 'codigo', campos['codigo'])

        recurso = Recurso(**campos)
        db.session.add(recurso)
        try:
            db.session.commit()
        except IntegrityError as e:
            # Otro proceso insertó el mismo código entre la consulta y el commit
            db.session.rollback()
            self._log_warning(f"Código duplicado {campos['codigo']}: {e.orig}")
            raise ConflictException('Recurso', 'codigo', campos['codigo'])
        except SQLAlchemyError as e:
            db.session.rollback()
            self._log_error(f"Error creando recurso {campos['codigo']}: {e}")
            raise ServiceException(f"Error al crear Recurso: {str(e)}")

        self._log_info(f"Recurso {recurso.codigo} creado con id {recurso.id}")
        return recurso

    def upsert_recursos(self, registros: Iterable[dict]) -> Dict[str, int]:
        """Carga idempotente por ``codigo``.

        Crea los que faltan, actualiza los que cambiaron y deja intactos los
        idénticos. Devuelve ``{'created', 'updated', 'existing'}``.
        """
        stats = {'created': 0, 'updated': 0, 'existing': 0}
        entrantes = [self.validar(registro) for registro in registros]

        codigos = [campos['codigo'] for campos in entrantes]
        actuales = {
            recurso.codigo: recurso
            for recurso in Recurso.query.filter(Recurso.codigo.in_(codigos)).all()
        } if codigos else {}

        for campos in entrantes:
            recurso = actuales.get(campos['codigo'])
            if recurso is None:
                recurso = Recurso(**campos)
                db.session.add(recurso)
                actuales[campos['codigo']] = recurso
                stats['created'] += 1
                continue

            cambios = {
                campo: campos[campo]
                for campo in CAMPOS_ACTUALIZABLES
                if getattr(recurso, campo) != campos[campo]
            }
            if cambios:
                for campo, valor in cambios.items():
                    setattr(recurso, campo, valor)
                stats['updated'] += 1
            else:
                stats['existing'] += 1

        self.commit()
        self._log_info(
            f"Recursos: {stats['created']} creados, {stats['updated']} actualizados, "
            f"{stats['existing']} sin cambios"
        )
        return stats

    def contar_por_tipo(self, solo_activos: bool = True) -> Dict[str, int]:
        query = db.session.query(Recurso.tipo, db.func.count(Recurso.id))
        if solo_activos:
            query = query.filter(Recurso.activo.is_(True))
        return dict(query.group_by(Recurso.tipo).all())
