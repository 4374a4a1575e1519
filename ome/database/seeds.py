"""
Datos iniciales y sintéticos para desarrollo.

Las funciones reciben la sesión ORM (``db.session`` dentro de Flask o una
sesión de ``ome.database.session`` fuera de él) y hacen commit al final.
"""
from __future__ import annotations

import logging

from faker import Faker

from ome.models import Continente, Ciudad, User, TIPO_ADMINISTRADOR

logger = logging.getLogger(__name__)

CONTINENTES = ("África", "América", "Antártida", "Asia", "Europa", "Oceanía")

# rango de ids de país asignados a las ciudades sintéticas
PAIS_MIN = 1
PAIS_MAX = 200


def seed_continentes(session) -> int:
    """Inserta los continentes que falten. Devuelve cuántos se crearon."""
    existentes = {nombre for (nombre,) in session.query(Continente.nombre)}
    nuevos = [Continente(nombre=n) for n in CONTINENTES if n not in existentes]
    session.add_all(nuevos)
    session.commit()
    logger.info("Continentes creados: %d", len(nuevos))
    return len(nuevos)


def seed_ciudades(session, cantidad: int = 500, locale: str | None = None, seed: int | None = None) -> int:
    """Pobla ``ciudad`` con filas sintéticas.

    El país es un id arbitrario entre 1 y 200; no se comprueba que exista.
    """
    faker = Faker(locale) if locale else Faker()
    if seed is not None:
        faker.seed_instance(seed)

    for _ in range(cantidad):
        ciudad = Ciudad()
        ciudad.nombre = faker.city()
        ciudad.pais = faker.random_int(min=PAIS_MIN, max=PAIS_MAX)
        ciudad.codigo_postal = faker.postcode()
        session.add(ciudad)

    session.commit()
    logger.info("Ciudades sintéticas creadas: %d", cantidad)
    return cantidad


def ensure_admin(session, email: str, password: str, name: str = "Administrador") -> User:
    """Crea (o promueve) el usuario administrador inicial."""
    email = email.strip().lower()
    user = session.query(User).filter_by(email=email).first()
    if user is None:
        user = User(email=email, name=name)
        session.add(user)
        logger.info("Administrador creado: %s", email)
    user.tipo_usuario = TIPO_ADMINISTRADOR
    user.set_password(password)
    session.commit()
    return user
