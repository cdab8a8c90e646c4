"""
Datos iniciales del gestor de jornadas.

Única fuente declarativa de los recursos (operarios y máquinas) y de los
catálogos de arranque. Los tres cargadores (ORM, sqlcmd, API) leen de aquí.
"""


def _recurso(codigo, nombre, tipo, agr_coste, activo=True):
    return {
        "codigo": codigo,
        "nombre": nombre,
        "tipo": tipo,
        "activo": activo,
        "agrCoste": agr_coste,
    }


OPERARIOS = [
    _recurso("OP001", "Juan Pérez", "operario", "MANO_OBRA_001"),
    _recurso("OP002", "María García", "operario", "MANO_OBRA_002"),
    _recurso("OP003", "Carlos López", "operario", "MANO_OBRA_003"),
    _recurso("OP004", "Ana Martínez", "operario", "MANO_OBRA_004"),
    _recurso("OP005", "Pedro Sánchez", "operario", "MANO_OBRA_005"),
    _recurso("OP006", "Laura Fernández", "operario", "MANO_OBRA_006"),
    _recurso("OP007", "Miguel Rodríguez", "operario", "MANO_OBRA_007"),
    _recurso("OP008", "Elena Jiménez", "operario", "MANO_OBRA_008"),
    _recurso("OP009", "José Morales", "operario", "MANO_OBRA_009"),
    _recurso("OP010", "Carmen Ruiz", "operario", "MANO_OBRA_010"),
    _recurso("OP011", "Francisco Torres", "operario", "MANO_OBRA_011"),
    _recurso("OP012", "Isabel Vargas", "operario", "MANO_OBRA_012"),
]

MAQUINAS = [
    _recurso("MAQ001", "Excavadora CAT 320", "maquina", "MAQUINA_001"),
    _recurso("MAQ002", "Camión Volquete MAN", "maquina", "MAQUINA_002"),
    _recurso("MAQ003", "Retroexcavadora JCB 3CX", "maquina", "MAQUINA_003"),
    _recurso("MAQ004", "Compactadora BOMAG BW213", "maquina", "MAQUINA_004"),
    _recurso("MAQ005", "Grúa Torre POTAIN MC85", "maquina", "MAQUINA_005"),
    _recurso("MAQ006", "Hormigonera LIEBHERR", "maquina", "MAQUINA_006"),
    _recurso("MAQ007", "Bulldozer CAT D6", "maquina", "MAQUINA_007"),
]

# Lote de ampliación: 10 máquinas nuevas
MAQUINAS_AMPLIACION = [
    _recurso("MAQ008", "Pala Cargadora CAT 950", "maquina", "MAQUINA_008"),
    _recurso("MAQ009", "Dumper AUSA D600", "maquina", "MAQUINA_009"),
    _recurso("MAQ010", "Martillo Hidráulico ATLAS COPCO", "maquina", "MAQUINA_010"),
    _recurso("MAQ011", "Camión Grúa LIEBHERR LTM 1030", "maquina", "MAQUINA_011"),
    _recurso("MAQ012", "Plataforma Elevadora JLG 2630", "maquina", "MAQUINA_012"),
    _recurso("MAQ013", "Fresadora WIRTGEN W120", "maquina", "MAQUINA_013"),
    _recurso("MAQ014", "Pavimentadora VOLVO ABG2820", "maquina", "MAQUINA_014"),
    _recurso("MAQ015", "Motoniveladora CAT 140M", "maquina", "MAQUINA_015"),
    _recurso("MAQ016", "Equipo de Soldadura MILLER", "maquina", "MAQUINA_016"),
    _recurso("MAQ017", "Generador CATERPILLAR 100KW", "maquina", "MAQUINA_017"),
]

ROSTER_BASE = OPERARIOS + MAQUINAS

LOTES = {
    "base": ROSTER_BASE,
    "ampliacion-maquinas": MAQUINAS_AMPLIACION,
}

LOTE_POR_DEFECTO = "base"


USUARIOS_INICIALES = [
    {"email": "admin@empresa.com", "nombre": "Administrador Sistema", "rol": "administrador"},
    {"email": "jefe1@empresa.com", "nombre": "Juan García - Jefe de Equipo", "rol": "jefe_equipo"},
    {
        "email": "tecnico1@empresa.com",
        "nombre": "María López - Técnico Transporte",
        "rol": "tecnico_transporte",
    },
    {"email": "operario1@empresa.com", "nombre": "Carlos Ruiz - Operario", "rol": "operario"},
    {"email": "operario2@empresa.com", "nombre": "Ana Martín - Operario", "rol": "operario"},
]

OBRAS_INICIALES = [
    {
        "codigo": "OB001",
        "descripcion": "Construcción Edificio Residencial Torre Norte",
        "observaciones": "Proyecto de 20 plantas con parking subterráneo",
        "activo": True,
    },
    {
        "codigo": "OB002",
        "descripcion": "Rehabilitación Carretera Nacional 340",
        "observaciones": "Tramo de 15 km entre Málaga y Torremolinos",
        "activo": True,
    },
    {
        "codigo": "OB003",
        "descripcion": "Ampliación Centro Comercial Plaza Mayor",
        "observaciones": "Nueva ala comercial de 5000 m²",
        "activo": True,
    },
    {
        "codigo": "OB004",
        "descripcion": "Construcción Puente sobre río Guadalquivir",
        "observaciones": "Puente de 200m de longitud",
        "activo": True,
    },
    {
        "codigo": "OB005",
        "descripcion": "Urbanización Las Palmeras",
        "observaciones": "Desarrollo urbano de 150 viviendas",
        "activo": False,
    },
]

TIPOS_ACTIVIDAD = [
    {
        "codigo": "TRANSP",
        "nombre": "Transporte",
        "descripcion": "Actividades de transporte de materiales y equipos",
    },
    {
        "codigo": "EXTEND",
        "nombre": "Extendido",
        "descripcion": "Actividades de extendido de materiales",
    },
    {
        "codigo": "FRESADO",
        "nombre": "Fresado",
        "descripcion": "Actividades de fresado de superficies",
    },
    {
        "codigo": "COMPAC",
        "nombre": "Compactación",
        "descripcion": "Actividades de compactación de materiales",
    },
    {
        "codigo": "MANT",
        "nombre": "Mantenimiento",
        "descripcion": "Actividades de mantenimiento de equipos",
    },
]


def obtener_lote(nombre):
    """Devuelve una copia del roster del lote; KeyError si no existe."""
    try:
        roster = LOTES[nombre]
    except KeyError:
        disponibles = ", ".join(sorted(LOTES))
        raise KeyError(f"Lote desconocido '{nombre}'. Disponibles: {disponibles}") from None
    return [dict(recurso) for recurso in roster]
