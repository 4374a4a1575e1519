from __future__ import annotations

from contextlib import contextmanager
from typing import List, Mapping, Optional

from flask import current_app as app
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from ome import db
from ome.models import CampusSede, Ciudad, Continente, Pais, Universidad
from ome.models.universidad import CAMPUS_FIELDS
from ome.schemas import UniversidadUpdate


class UniversidadError(RuntimeError):
    """Errores de negocio o BD sobre universidades y campus."""


class RegistroNoEncontrado(UniversidadError):
    def __init__(self, entidad: str, registro_id):
        super().__init__(f"No existe {entidad} con id {registro_id}")
        self.entidad = entidad
        self.registro_id = registro_id


@contextmanager
def _transaccion(accion: str):
    """Commit al final del bloque; rollback completo ante cualquier error."""
    try:
        yield
        db.session.commit()
    except UniversidadError:
        db.session.rollback()
        raise
    except SQLAlchemyError as e:
        db.session.rollback()
        app.logger.exception("Fallo BD al %s", accion)
        raise UniversidadError(f"No se pudo {accion}") from e


def _get_or_fail(model, registro_id, entidad: str):
    obj = db.session.get(model, registro_id) if registro_id is not None else None
    if obj is None:
        raise RegistroNoEncontrado(entidad, registro_id)
    return obj


def _ciudades_existentes(ids) -> set:
    ids = set(ids)
    if not ids:
        return set()
    return {cid for (cid,) in db.session.query(Ciudad.id).filter(Ciudad.id.in_(ids))}


def _asignar_campus(campus: CampusSede, datos: Mapping) -> None:
    for campo in CAMPUS_FIELDS:
        if campo in datos:
            setattr(campus, campo, datos[campo])


# ---------------------------------------------------------------------------
# Consultas
# ---------------------------------------------------------------------------

def listar_con_campus() -> List[Universidad]:
    """Todas las universidades por id, con campus y la ciudad de cada campus."""
    return (
        db.session.query(Universidad)
        .options(selectinload(Universidad.campus_sedes).selectinload(CampusSede.ciudad_r))
        .order_by(Universidad.id)
        .all()
    )


def filtrar_por_pais(pais_id) -> List[Universidad]:
    """Universidades cuya columna ``pais`` es ``pais_id`` (sin recorrer campus → ciudad)."""
    return (
        db.session.query(Universidad)
        .options(selectinload(Universidad.campus_sedes))
        .filter(Universidad.pais == pais_id)
        .order_by(Universidad.id)
        .all()
    )


def obtener_para_editar(universidad_id: int) -> Universidad:
    universidad = (
        db.session.query(Universidad)
        .options(
            selectinload(Universidad.campus_sedes)
            .selectinload(CampusSede.ciudad_r)
            .selectinload(Ciudad.pais_r)
            .selectinload(Pais.continente_r)
        )
        .filter(Universidad.id == universidad_id)
        .first()
    )
    if universidad is None:
        raise RegistroNoEncontrado("universidad", universidad_id)
    return universidad


def campus_de_universidad(universidad_id: int) -> List[CampusSede]:
    """Campus de la universidad, el más reciente primero."""
    return (
        db.session.query(CampusSede)
        .filter(CampusSede.universidad == universidad_id)
        .order_by(CampusSede.id.desc())
        .all()
    )


def lookup_continentes() -> dict:
    """{id: nombre} para poblar el select de continentes."""
    return {cid: nombre for cid, nombre in db.session.query(Continente.id, Continente.nombre).order_by(Continente.id)}


# ---------------------------------------------------------------------------
# Escrituras
# ---------------------------------------------------------------------------

def crear_con_campus(nombre_universidad: str, campus: Mapping, pais: Optional[int] = None) -> Universidad:
    """Crea la universidad y su primer campus en una sola transacción.

    Si no se indica ``pais`` se toma el de la ciudad del campus.
    """
    ciudad = _get_or_fail(Ciudad, campus.get("ciudad"), "ciudad")
    with _transaccion("guardar la universidad"):
        universidad = Universidad(nombre=nombre_universidad, pais=pais if pais is not None else ciudad.pais)
        db.session.add(universidad)
        db.session.flush()  # id generado

        sede = CampusSede(universidad=universidad.id)
        _asignar_campus(sede, campus)
        sede.ciudad = ciudad.id
        db.session.add(sede)
    app.logger.info("Universidad %s creada con campus %s", universidad.id, sede.id)
    return universidad


def agregar_campus(campus: Mapping) -> List[CampusSede]:
    """Agrega un campus a una universidad existente y devuelve sus campus (id desc)."""
    universidad = _get_or_fail(Universidad, campus.get("universidad"), "universidad")
    _get_or_fail(Ciudad, campus.get("ciudad"), "ciudad")
    with _transaccion("guardar el campus"):
        sede = CampusSede(universidad=universidad.id)
        _asignar_campus(sede, campus)
        db.session.add(sede)
    app.logger.info("Campus %s agregado a universidad %s", sede.id, universidad.id)
    return campus_de_universidad(universidad.id)


def actualizar_masivo(payload: UniversidadUpdate) -> Universidad:
    """Actualiza la universidad y todos sus campus, todo o nada.

    Cada campus debe existir y pertenecer a la universidad; si falla alguno
    no se escribe nada.
    """
    universidad = _get_or_fail(Universidad, payload.id_universidad, "universidad")

    ids = [c.id for c in payload.campus]
    sedes = {s.id: s for s in db.session.query(CampusSede).filter(CampusSede.id.in_(ids))}
    for item in payload.campus:
        # solo campus de la universidad indicada
        if item.id not in sedes or sedes[item.id].universidad != universidad.id:
            raise RegistroNoEncontrado("campus", item.id)

    ciudades = _ciudades_existentes(c.ciudad for c in payload.campus)
    for item in payload.campus:
        if item.ciudad not in ciudades:
            raise RegistroNoEncontrado("ciudad", item.ciudad)

    with _transaccion("actualizar la universidad"):
        universidad.nombre = payload.nombre_universidad
        for item in payload.campus:
            _asignar_campus(sedes[item.id], item.model_dump(include=set(CAMPUS_FIELDS)))
    app.logger.info("Universidad %s actualizada (%d campus)", universidad.id, len(ids))
    return universidad


def eliminar_universidad(universidad_id: int) -> str:
    """Elimina la universidad (y sus campus). Devuelve el mensaje para el usuario."""
    universidad = _get_or_fail(Universidad, universidad_id, "universidad")
    nombre = universidad.nombre
    with _transaccion("eliminar la universidad"):
        db.session.delete(universidad)
    app.logger.info("Universidad %s eliminada", universidad_id)
    return f" La universidad {nombre} Fue eliminado"


def eliminar_campus(campus_id: int) -> str:
    sede = _get_or_fail(CampusSede, campus_id, "campus")
    nombre = sede.nombre
    with _transaccion("eliminar el campus"):
        db.session.delete(sede)
    app.logger.info("Campus %s eliminado", campus_id)
    return f" El campus {nombre} Fue eliminado"
