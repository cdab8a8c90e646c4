"""
Modelo Actividad: jornada de un recurso en una obra.

Una actividad sin ``fecha_fin`` u ``hora_fin`` es una jornada abierta (en
curso). Los campos GPS y ``km_recorridos`` son opcionales.
"""

import re
from datetime import datetime

from app.extensions import db


HORA_PATTERN = re.compile(r'^([0-1][0-9]|2[0-3]):([0-5][0-9])$')
MINUTOS_VALIDOS = ('00', '15', '30', '45')


class Actividad(db.Model):
    __tablename__ = 'actividades'

    id = db.Column(db.Integer, primary_key=True)
    obra_id = db.Column(db.Integer, db.ForeignKey('obras.id'), nullable=False)
    recurso_id = db.Column(db.Integer, db.ForeignKey('recursos.id'), nullable=False)
    tipo_actividad_id = db.Column(db.Integer, db.ForeignKey('tipos_actividad.id'), nullable=False)

    fecha_inicio = db.Column(db.Date, nullable=False)
    hora_inicio = db.Column(db.Time, nullable=False)
    fecha_fin = db.Column(db.Date)
    hora_fin = db.Column(db.Time)
    observaciones = db.Column(db.UnicodeText)

    # Auditoría
    usuario_creacion_id = db.Column(
        'usuario_creacion', db.Integer, db.ForeignKey('usuarios.id'), nullable=False
    )
    fecha_creacion = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    usuario_modificacion_id = db.Column(
        'usuario_modificacion', db.Integer, db.ForeignKey('usuarios.id')
    )
    fecha_modificacion = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # GPS y distancia
    latitud_inicio = db.Column(db.Numeric(10, 7))
    longitud_inicio = db.Column(db.Numeric(10, 7))
    latitud_fin = db.Column(db.Numeric(10, 7))
    longitud_fin = db.Column(db.Numeric(10, 7))
    km_recorridos = db.Column(db.Numeric(8, 2))

    obra = db.relationship('Obra', back_populates='actividades')
    recurso = db.relationship('Recurso', back_populates='actividades')
    tipo_actividad = db.relationship('TipoActividad', back_populates='actividades')
    usuario_creacion = db.relationship(
        'Usuario', back_populates='actividades_creadas', foreign_keys=[usuario_creacion_id]
    )
    usuario_modificacion = db.relationship(
        'Usuario', back_populates='actividades_modificadas', foreign_keys=[usuario_modificacion_id]
    )

    def __repr__(self):
        return f'<Actividad {self.id} recurso={self.recurso_id} {self.fecha_inicio}>'

    def esta_abierta(self):
        return self.fecha_fin is None or self.hora_fin is None

    @property
    def inicio(self):
        return datetime.combine(self.fecha_inicio, self.hora_inicio)

    @property
    def fin(self):
        if self.esta_abierta():
            return None
        return datetime.combine(self.fecha_fin, self.hora_fin)

    def duracion_minutos(self):
        """Minutos completos trabajados; ``None`` si la jornada sigue abierta."""
        fin = self.fin
        if fin is None:
            return None
        return int((fin - self.inicio).total_seconds() // 60)

    def duracion_horas(self):
        minutos = self.duracion_minutos()
        if not minutos:
            return None
        return round(minutos / 60, 2)

    def se_solapa_con(self, otra):
        """Indica si dos actividades del mismo recurso se pisan en el tiempo.

        Dos jornadas abiertas sólo se solapan si empiezan en el mismo
        instante. Si una está abierta, la cerrada se solapa cuando abarca el
        inicio de la abierta.
        """
        if self.recurso_id != otra.recurso_id:
            return False

        inicio, fin = self.inicio, self.fin
        otra_inicio, otra_fin = otra.inicio, otra.fin

        if fin is None and otra_fin is None:
            return inicio == otra_inicio

        if fin is None:
            return otra_inicio < inicio < otra_fin

        if otra_fin is None:
            return inicio < otra_inicio < fin

        return inicio < otra_fin and fin > otra_inicio

    @staticmethod
    def validar_formato_hora(hora):
        """Valida ``HH:MM`` en tramos de 15 minutos."""
        if not isinstance(hora, str):
            return False
        match = HORA_PATTERN.match(hora)
        if not match:
            return False
        return match.group(2) in MINUTOS_VALIDOS

    def to_erp_export(self):
        fila = {
            'fecha': self.fecha_inicio.isoformat(),
            'recurso': self.recurso.display_name,
            'obra': self.obra.display_name,
            'cantidad': self.duracion_horas() or 0,
            'agr_coste': self.recurso.agr_coste,
            'actividad': self.tipo_actividad.nombre,
        }
        if self.km_recorridos:
            fila['km_recorridos'] = float(self.km_recorridos)
        return fila
