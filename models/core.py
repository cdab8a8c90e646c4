"""
Modelos Core: Usuario, Obra, Recurso, TipoActividad
Catálogos sobre los que se registran las actividades (jornadas).
"""

from datetime import datetime

from app.extensions import db


class Usuario(db.Model):
    __tablename__ = 'usuarios'

    ROLES = ('operario', 'jefe_equipo', 'tecnico_transporte', 'administrador')

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.Unicode(255), unique=True, nullable=False)
    nombre = db.Column(db.Unicode(255), nullable=False)
    rol = db.Column(db.Unicode(20), nullable=False, default='operario')
    activo = db.Column(db.Boolean, nullable=False, default=True)
    fecha_creacion = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    actividades_creadas = db.relationship(
        'Actividad',
        back_populates='usuario_creacion',
        foreign_keys='Actividad.usuario_creacion_id',
        lazy='dynamic'
    )
    actividades_modificadas = db.relationship(
        'Actividad',
        back_populates='usuario_modificacion',
        foreign_keys='Actividad.usuario_modificacion_id',
        lazy='dynamic'
    )

    def __repr__(self):
        return f'<Usuario {self.email}>'

    @property
    def es_administrador(self):
        return self.rol == 'administrador'

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'nombre': self.nombre,
            'rol': self.rol,
            'activo': self.activo,
        }


class Obra(db.Model):
    __tablename__ = 'obras'

    id = db.Column(db.Integer, primary_key=True)
    codigo = db.Column(db.Unicode(50), unique=True, nullable=False)
    descripcion = db.Column(db.Unicode(500), nullable=False)
    observaciones = db.Column(db.UnicodeText)
    activo = db.Column(db.Boolean, nullable=False, default=True)
    fecha_creacion = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    fecha_actualizacion = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    actividades = db.relationship('Actividad', back_populates='obra', lazy='dynamic')

    def __repr__(self):
        return f'<Obra {self.codigo}>'

    @property
    def display_name(self):
        return f'{self.codigo} - {self.descripcion}'

    def to_dict(self):
        return {
            'id': self.id,
            'codigo': self.codigo,
            'descripcion': self.descripcion,
            'observaciones': self.observaciones,
            'activo': self.activo,
        }


class Recurso(db.Model):
    """Operario o máquina imputable en una actividad."""

    __tablename__ = 'recursos'

    TIPOS = ('operario', 'maquina')

    id = db.Column(db.Integer, primary_key=True)
    codigo = db.Column(db.Unicode(50), unique=True, nullable=False)
    nombre = db.Column(db.Unicode(255), nullable=False)
    tipo = db.Column(db.Unicode(20), nullable=False)
    activo = db.Column(db.Boolean, nullable=False, default=True)
    # La columna conserva el nombre del ERP
    agr_coste = db.Column('agrCoste', db.Unicode(100), nullable=False)
    fecha_creacion = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    actividades = db.relationship('Actividad', back_populates='recurso', lazy='dynamic')

    def __repr__(self):
        return f'<Recurso {self.codigo} ({self.tipo})>'

    @classmethod
    def from_external(cls, data):
        """Construye un recurso desde un payload externo (API, sincronización)."""
        return cls(
            codigo=data.get('codigo'),
            nombre=data.get('nombre'),
            tipo='maquina' if data.get('tipo') == 'maquina' else 'operario',
            agr_coste=data.get('agr_coste') or data.get('agrCoste'),
            activo=data.get('activo') is not False,
        )

    @property
    def es_operario(self):
        return self.tipo == 'operario'

    @property
    def es_maquina(self):
        return self.tipo == 'maquina'

    @property
    def display_name(self):
        return f'{self.codigo} - {self.nombre}'

    def to_dict(self):
        return {
            'id': self.id,
            'codigo': self.codigo,
            'nombre': self.nombre,
            'tipo': self.tipo,
            'activo': self.activo,
            'agrCoste': self.agr_coste,
        }


class TipoActividad(db.Model):
    __tablename__ = 'tipos_actividad'

    id = db.Column(db.Integer, primary_key=True)
    codigo = db.Column(db.Unicode(20), unique=True, nullable=False)
    nombre = db.Column(db.Unicode(255), nullable=False)
    descripcion = db.Column(db.UnicodeText)
    fecha_creacion = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    actividades = db.relationship('Actividad', back_populates='tipo_actividad', lazy='dynamic')

    def __repr__(self):
        return f'<TipoActividad {self.codigo}>'

    def to_dict(self):
        return {
            'id': self.id,
            'codigo': self.codigo,
            'nombre': self.nombre,
            'descripcion': self.descripcion,
        }
