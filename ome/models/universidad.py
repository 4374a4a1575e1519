"""Universidades y sus campus/sedes."""
from ome import db


CAMPUS_FIELDS = ("nombre", "telefono", "fax", "sitio_web", "ciudad")


class Universidad(db.Model):
    __tablename__ = "universidad"

    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(255), nullable=False)
    # El filtro por país compara contra esta columna, no contra campus → ciudad → país
    pais = db.Column(db.Integer, nullable=True, index=True)

    campus_sedes = db.relationship(
        "CampusSede",
        back_populates="universidad_r",
        order_by="CampusSede.id",
        cascade="all, delete-orphan",
    )

    def to_dict(self, depth=0):
        """Serializa con los campus anidados.

        ``depth`` controla cuánto se expande cada campus:
        0 solo campus, 1 con ciudad, 2 con ciudad → país → continente.
        """
        return {
            "id": self.id,
            "nombre": self.nombre,
            "pais": self.pais,
            "campus_sedes": [c.to_dict(depth=depth) for c in self.campus_sedes],
        }

    def __str__(self):
        return self.nombre


class CampusSede(db.Model):
    __tablename__ = "campus_sede"

    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(255), nullable=False)
    telefono = db.Column(db.String(50))
    fax = db.Column(db.String(50))
    sitio_web = db.Column(db.String(255))
    universidad = db.Column(db.Integer, db.ForeignKey("universidad.id"), nullable=False, index=True)
    ciudad = db.Column(db.Integer, db.ForeignKey("ciudad.id"), nullable=False, index=True)

    universidad_r = db.relationship("Universidad", back_populates="campus_sedes")
    ciudad_r = db.relationship("Ciudad", back_populates="campus_sedes")

    def to_dict(self, depth=0):
        data = {
            "id": self.id,
            "nombre": self.nombre,
            "telefono": self.telefono,
            "fax": self.fax,
            "sitio_web": self.sitio_web,
            "universidad": self.universidad,
            "ciudad": self.ciudad,
        }
        if depth >= 1:
            data["ciudad_r"] = self.ciudad_r.to_dict(with_pais=depth >= 2) if self.ciudad_r else None
        return data

    def __str__(self):
        return self.nombre
