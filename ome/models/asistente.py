"""Beneficios y asistentes de postulantes UACH.

Solo se modelan las claves foráneas: borrar un beneficio o un postulante
elimina en cascada sus filas de ``asistente``.
"""
from ome import db


class Beneficio(db.Model):
    __tablename__ = "beneficio"

    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(255), nullable=False)


class PreUach(db.Model):
    __tablename__ = "pre_uach"

    postulante = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(255))


class Asistente(db.Model):
    __tablename__ = "asistente"

    id = db.Column(db.Integer, primary_key=True)
    beneficio = db.Column(
        db.Integer,
        db.ForeignKey(
            "beneficio.id",
            name="asistente_beneficio_foreign",
            ondelete="CASCADE",
            onupdate="NO ACTION",
        ),
        nullable=False,
    )
    postulante = db.Column(
        db.Integer,
        db.ForeignKey(
            "pre_uach.postulante",
            name="asistente_pre_uach_foreign",
            ondelete="CASCADE",
            onupdate="NO ACTION",
        ),
        nullable=False,
    )
