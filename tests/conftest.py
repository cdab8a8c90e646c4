"""
Pytest configuration and fixtures for the gestor de jornadas.
"""
import os
from datetime import date, time

import pytest

# Set test environment variables before importing app
os.environ['FLASK_ENV'] = 'testing'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['TESTING'] = '1'

from flask_migrate import upgrade

from app import create_app
from app.extensions import db
from models import Actividad, Obra, Recurso, TipoActividad, Usuario


def _build_app(tmp_path):
    return create_app(overrides={
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'test.db'}",
        'SECRET_KEY': 'test-secret-key',
    })


@pytest.fixture(scope='function')
def bare_app(tmp_path):
    """App over an empty database: no migrations applied."""
    flask_app = _build_app(tmp_path)
    with flask_app.app_context():
        yield flask_app
        db.session.remove()
        db.engine.dispose()


@pytest.fixture(scope='function')
def app(tmp_path):
    """App over a temporary SQLite database migrated to head."""
    flask_app = _build_app(tmp_path)
    with flask_app.app_context():
        upgrade()
        yield flask_app
        db.session.remove()
        db.engine.dispose()


@pytest.fixture(scope='function')
def client(app):
    """Create a test client for making requests."""
    return app.test_client()


@pytest.fixture(scope='function')
def runner(app):
    """Create a CLI runner for testing CLI commands."""
    return app.test_cli_runner()


@pytest.fixture(scope='function')
def usuario(app):
    user = Usuario(email='jefe@empresa.com', nombre='Jefe de Equipo', rol='jefe_equipo')
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture(scope='function')
def obra(app):
    item = Obra(codigo='OB900', descripcion='Obra de pruebas')
    db.session.add(item)
    db.session.commit()
    return item


@pytest.fixture(scope='function')
def tipo_actividad(app):
    item = TipoActividad(codigo='TRANSP', nombre='Transporte')
    db.session.add(item)
    db.session.commit()
    return item


@pytest.fixture(scope='function')
def recurso(app):
    item = Recurso(codigo='OP900', nombre='Operario Pruebas', tipo='operario', agr_coste='MANO_OBRA_900')
    db.session.add(item)
    db.session.commit()
    return item


@pytest.fixture(scope='function')
def make_actividad(usuario, obra, tipo_actividad, recurso):
    """Factory for unsaved activities of the same recurso."""
    def _make(inicio=(date(2024, 3, 4), time(8, 0)), fin=(None, None), **extra):
        return Actividad(
            obra=obra,
            recurso=recurso,
            recurso_id=recurso.id,
            tipo_actividad=tipo_actividad,
            usuario_creacion=usuario,
            fecha_inicio=inicio[0],
            hora_inicio=inicio[1],
            fecha_fin=fin[0],
            hora_fin=fin[1],
            **extra,
        )
    return _make


# Markers for categorizing tests
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests (fast)"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (slower)"
    )
