"""
Modelos ORM de la intranet.

Las tablas se declaran con Flask-SQLAlchemy; ``ome.database.schema`` las crea.
"""
from ome.models.geografia import Continente, Pais, Ciudad
from ome.models.universidad import Universidad, CampusSede
from ome.models.usuario import User, TIPO_ADMINISTRADOR, TIPO_USUARIO, TIPOS_USUARIO
from ome.models.asistente import Beneficio, PreUach, Asistente

__all__ = [
    "Continente",
    "Pais",
    "Ciudad",
    "Universidad",
    "CampusSede",
    "User",
    "TIPO_ADMINISTRADOR",
    "TIPO_USUARIO",
    "TIPOS_USUARIO",
    "Beneficio",
    "PreUach",
    "Asistente",
]
