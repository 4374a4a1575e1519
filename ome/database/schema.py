"""
Definición y creación del esquema a partir de los modelos declarados.
"""
from flask import current_app
from sqlalchemy import event
from sqlalchemy.engine import Engine

from ome import db

_pragmas_registered = False


def _sqlite_fk_on(dbapi_connection, connection_record):
    # SQLite ignora las FK (y sus ON DELETE CASCADE) salvo que se active el pragma
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def register_sqlite_pragmas():
    global _pragmas_registered
    if _pragmas_registered:
        return
    event.listen(Engine, "connect", _sqlite_fk_on)
    _pragmas_registered = True


def create_schema(drop=False):
    """Crea todas las tablas (requiere contexto de aplicación)."""
    if drop:
        current_app.logger.warning("Eliminando tablas existentes")
        db.drop_all()
    db.create_all()
    current_app.logger.info("Esquema creado: %s", ", ".join(sorted(db.metadata.tables)))


def drop_schema():
    db.drop_all()
