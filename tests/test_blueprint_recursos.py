"""
Tests for the /recursos endpoints.
"""
import pytest
from sqlalchemy.exc import OperationalError

from datos_iniciales import MAQUINAS_AMPLIACION, ROSTER_BASE
from services.recurso_service import RecursoService


NUEVO = {'codigo': 'OP500', 'nombre': 'Operario Nuevo', 'tipo': 'operario',
         'activo': True, 'agrCoste': 'MANO_OBRA_500'}


@pytest.mark.integration
def test_post_crea_recurso(client):
    response = client.post('/recursos', json=NUEVO)
    assert response.status_code == 201

    data = response.get_json()
    assert 'OP500' in data['message']
    assert data['recurso']['codigo'] == 'OP500'
    assert data['recurso']['agrCoste'] == 'MANO_OBRA_500'
    assert data['recurso']['id'] is not None


@pytest.mark.integration
def test_post_duplicado_409(client):
    client.post('/recursos', json=NUEVO)
    response = client.post('/recursos', json=NUEVO)
    assert response.status_code == 409
    data = response.get_json()
    assert 'ya existe' in data['error']
    assert 'timestamp' in data


@pytest.mark.integration
@pytest.mark.parametrize('payload', [
    {'nombre': 'Sin código', 'tipo': 'operario', 'agrCoste': 'X'},
    {'codigo': 'OP501', 'tipo': 'operario', 'agrCoste': 'X'},
    {'codigo': 'OP501', 'nombre': 'Sin tipo', 'agrCoste': 'X'},
    dict(NUEVO, tipo='camion'),
])
def test_post_invalido_400(client, payload):
    response = client.post('/recursos', json=payload)
    assert response.status_code == 400
    assert set(response.get_json()) == {'error', 'timestamp'}


@pytest.mark.integration
def test_post_json_malformado_400(client):
    response = client.post('/recursos', data='{no es json', content_type='application/json')
    assert response.status_code == 400
    assert 'JSON' in response.get_json()['error']


@pytest.mark.integration
def test_get_lista_activos_ordenados(client):
    RecursoService().upsert_recursos(ROSTER_BASE + [dict(MAQUINAS_AMPLIACION[0], activo=False)])

    response = client.get('/recursos')
    assert response.status_code == 200
    data = response.get_json()
    assert len(data) == 19
    assert [r['codigo'] for r in data[:2]] == ['MAQ001', 'MAQ002']
    assert data[-1]['codigo'] == 'OP012'
    assert all(r['activo'] for r in data)


@pytest.mark.integration
def test_get_filtros(client):
    RecursoService().upsert_recursos(ROSTER_BASE + [dict(MAQUINAS_AMPLIACION[0], activo=False)])

    assert len(client.get('/recursos?todos=1').get_json()) == 20
    operarios = client.get('/recursos?tipo=operario').get_json()
    assert len(operarios) == 12
    assert {r['tipo'] for r in operarios} == {'operario'}


@pytest.mark.integration
def test_get_vacio(client):
    response = client.get('/recursos')
    assert response.status_code == 200
    assert response.get_json() == []


@pytest.mark.integration
def test_get_error_de_base_de_datos_500(client, monkeypatch):
    def falla(self, **kwargs):
        raise OperationalError('SELECT', {}, Exception('database is locked'))

    monkeypatch.setattr(RecursoService, 'listar', falla)
    response = client.get('/recursos')
    assert response.status_code == 500
    assert set(response.get_json()) == {'error', 'timestamp'}


@pytest.mark.integration
def test_get_sin_tablas_500(bare_app):
    response = bare_app.test_client().get('/recursos')
    assert response.status_code == 500
    assert response.get_json()['error'] == 'Error al obtener recursos'


@pytest.mark.integration
def test_post_sin_tablas_500(bare_app):
    response = bare_app.test_client().post('/recursos', json=NUEVO)
    assert response.status_code == 500
    assert set(response.get_json()) == {'error', 'timestamp'}
