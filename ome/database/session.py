"""
Crea un sessionmaker independiente del contexto Flask, útil para scripts o tareas offline.
"""
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from ome.config import Config


def make_session_factory(database_uri=None, **engine_kwargs):
    """
    Devuelve un sessionmaker ligado a ``database_uri`` (por defecto el de Config).
    """
    engine = create_engine(database_uri or Config.SQLALCHEMY_DATABASE_URI, pool_pre_ping=True, **engine_kwargs)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
