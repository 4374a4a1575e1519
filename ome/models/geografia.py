"""Taxonomía geográfica: continente → país → ciudad."""
from ome import db


class Continente(db.Model):
    __tablename__ = "continente"

    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(9), nullable=False)

    paises = db.relationship("Pais", back_populates="continente_r")

    def to_dict(self):
        return {"id": self.id, "nombre": self.nombre}

    def __str__(self):
        return self.nombre


class Pais(db.Model):
    __tablename__ = "pais"

    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(100), nullable=False)
    continente = db.Column(db.Integer, db.ForeignKey("continente.id"), nullable=False, index=True)

    continente_r = db.relationship("Continente", back_populates="paises")

    def to_dict(self, with_continente=False):
        data = {"id": self.id, "nombre": self.nombre, "continente": self.continente}
        if with_continente:
            data["continente_r"] = self.continente_r.to_dict() if self.continente_r else None
        return data

    def __str__(self):
        return self.nombre


class Ciudad(db.Model):
    __tablename__ = "ciudad"

    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(100), nullable=False)
    pais = db.Column(db.Integer, nullable=False, index=True)
    codigo_postal = db.Column(db.String(20))

    # ciudad.pais no es FK real: el seeder asigna ids arbitrarios
    pais_r = db.relationship(
        "Pais",
        primaryjoin="foreign(Ciudad.pais) == Pais.id",
        viewonly=True,
    )
    campus_sedes = db.relationship("CampusSede", back_populates="ciudad_r")

    def to_dict(self, with_pais=False):
        data = {
            "id": self.id,
            "nombre": self.nombre,
            "pais": self.pais,
            "codigo_postal": self.codigo_postal,
        }
        if with_pais:
            data["pais_r"] = self.pais_r.to_dict(with_continente=True) if self.pais_r else None
        return data

    def __str__(self):
        return self.nombre
