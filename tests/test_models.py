"""
Tests for database models.
"""
from datetime import date, time
from decimal import Decimal

import pytest

from app.extensions import db
from models import Actividad, Obra, Recurso, Usuario


@pytest.mark.unit
def test_recurso_display_and_tipo(app, recurso):
    assert recurso.display_name == 'OP900 - Operario Pruebas'
    assert recurso.es_operario
    assert not recurso.es_maquina


@pytest.mark.unit
def test_recurso_to_dict_uses_wire_keys(app, recurso):
    data = recurso.to_dict()
    assert set(data) == {'id', 'codigo', 'nombre', 'tipo', 'activo', 'agrCoste'}
    assert data['agrCoste'] == 'MANO_OBRA_900'
    assert data['activo'] is True


@pytest.mark.unit
def test_recurso_from_external():
    recurso = Recurso.from_external({
        'codigo': 'MAQ900', 'nombre': 'Grúa', 'tipo': 'maquina', 'agrCoste': 'MAQUINA_900',
    })
    assert recurso.es_maquina
    assert recurso.agr_coste == 'MAQUINA_900'
    assert recurso.activo is True

    otro = Recurso.from_external({'codigo': 'X1', 'nombre': 'X', 'tipo': 'otro',
                                  'agr_coste': 'C', 'activo': False})
    assert otro.tipo == 'operario'
    assert otro.agr_coste == 'C'
    assert otro.activo is False


@pytest.mark.unit
def test_usuario_defaults(app):
    user = Usuario(email='nuevo@empresa.com', nombre='Nuevo')
    db.session.add(user)
    db.session.commit()
    assert user.rol == 'operario'
    assert user.activo is True
    assert not user.es_administrador


@pytest.mark.unit
def test_obra_display_name(app, obra):
    assert obra.display_name == 'OB900 - Obra de pruebas'
    assert obra.fecha_actualizacion is not None


@pytest.mark.unit
def test_actividad_abierta_sin_fin(make_actividad):
    actividad = make_actividad()
    assert actividad.esta_abierta()
    assert actividad.fin is None
    assert actividad.duracion_minutos() is None
    assert actividad.duracion_horas() is None


@pytest.mark.unit
def test_actividad_abierta_con_fecha_pero_sin_hora(make_actividad):
    actividad = make_actividad(fin=(date(2024, 3, 4), None))
    assert actividad.esta_abierta()


@pytest.mark.unit
def test_actividad_duracion(make_actividad):
    actividad = make_actividad(fin=(date(2024, 3, 4), time(16, 45)))
    assert not actividad.esta_abierta()
    assert actividad.duracion_minutos() == 525
    assert actividad.duracion_horas() == 8.75


@pytest.mark.unit
def test_actividad_duracion_cruza_medianoche(make_actividad):
    actividad = make_actividad(
        inicio=(date(2024, 3, 4), time(22, 0)),
        fin=(date(2024, 3, 5), time(2, 30)),
    )
    assert actividad.duracion_horas() == 4.5


@pytest.mark.unit
def test_actividad_duracion_cero_es_none(make_actividad):
    actividad = make_actividad(fin=(date(2024, 3, 4), time(8, 0)))
    assert actividad.duracion_minutos() == 0
    assert actividad.duracion_horas() is None


@pytest.mark.unit
def test_solape_intervalos_cerrados(make_actividad):
    a = make_actividad(fin=(date(2024, 3, 4), time(12, 0)))
    b = make_actividad(inicio=(date(2024, 3, 4), time(11, 0)), fin=(date(2024, 3, 4), time(13, 0)))
    c = make_actividad(inicio=(date(2024, 3, 4), time(12, 0)), fin=(date(2024, 3, 4), time(14, 0)))
    assert a.se_solapa_con(b)
    assert b.se_solapa_con(a)
    # Contiguas no se solapan
    assert not a.se_solapa_con(c)


@pytest.mark.unit
def test_solape_con_actividad_abierta(make_actividad):
    cerrada = make_actividad(fin=(date(2024, 3, 4), time(12, 0)))
    abierta_dentro = make_actividad(inicio=(date(2024, 3, 4), time(10, 0)))
    abierta_despues = make_actividad(inicio=(date(2024, 3, 4), time(13, 0)))
    assert cerrada.se_solapa_con(abierta_dentro)
    assert abierta_dentro.se_solapa_con(cerrada)
    assert not cerrada.se_solapa_con(abierta_despues)


@pytest.mark.unit
def test_solape_dos_abiertas(make_actividad):
    a = make_actividad()
    b = make_actividad()
    c = make_actividad(inicio=(date(2024, 3, 4), time(9, 0)))
    assert a.se_solapa_con(b)
    assert not a.se_solapa_con(c)


@pytest.mark.unit
def test_sin_solape_entre_recursos_distintos(make_actividad):
    a = make_actividad(fin=(date(2024, 3, 4), time(12, 0)))
    b = make_actividad(fin=(date(2024, 3, 4), time(12, 0)))
    b.recurso_id = a.recurso_id + 1
    assert not a.se_solapa_con(b)


@pytest.mark.unit
@pytest.mark.parametrize('hora, valida', [
    ('00:00', True),
    ('08:15', True),
    ('23:45', True),
    ('12:10', False),
    ('24:00', False),
    ('7:30', False),
    ('', False),
    (None, False),
])
def test_validar_formato_hora(hora, valida):
    assert Actividad.validar_formato_hora(hora) is valida


@pytest.mark.integration
def test_actividad_persiste_con_gps(app, make_actividad):
    actividad = make_actividad(
        fin=(date(2024, 3, 4), time(10, 0)),
        latitud_inicio=Decimal('40.4167754'),
        longitud_inicio=Decimal('-3.7037902'),
        km_recorridos=Decimal('12.50'),
    )
    db.session.add(actividad)
    db.session.commit()

    guardada = db.session.get(Actividad, actividad.id)
    assert guardada.usuario_creacion.email == 'jefe@empresa.com'
    assert guardada.obra.codigo == 'OB900'
    assert float(guardada.km_recorridos) == 12.5


@pytest.mark.unit
def test_to_erp_export(make_actividad):
    actividad = make_actividad(fin=(date(2024, 3, 4), time(10, 30)))
    fila = actividad.to_erp_export()
    assert fila == {
        'fecha': '2024-03-04',
        'recurso': 'OP900 - Operario Pruebas',
        'obra': 'OB900 - Obra de pruebas',
        'cantidad': 2.5,
        'agr_coste': 'MANO_OBRA_900',
        'actividad': 'Transporte',
    }

    actividad.km_recorridos = Decimal('7.25')
    assert actividad.to_erp_export()['km_recorridos'] == 7.25


@pytest.mark.unit
def test_to_erp_export_actividad_abierta(make_actividad):
    assert make_actividad().to_erp_export()['cantidad'] == 0


@pytest.mark.integration
def test_obra_codigo_unico(app, obra):
    from sqlalchemy.exc import IntegrityError

    db.session.add(Obra(codigo='OB900', descripcion='Duplicada'))
    with pytest.raises(IntegrityError):
        db.session.commit()
    db.session.rollback()
