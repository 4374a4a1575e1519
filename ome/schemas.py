"""
Pydantic schemas para el payload ``infoUniversidad`` de la edición masiva.

El formulario de edición envía un arreglo JSON: cada elemento es un campus
y el primero trae además ``id_universidad`` y ``nombre_universidad``.
Aquí se convierte a una estructura tipada antes de tocar la base de datos.
"""
import json
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class PayloadError(ValueError):
    """El payload no es un arreglo JSON con la forma esperada."""

    def __init__(self, errors):
        super().__init__("payload inválido")
        self.errors = errors


class CampusUpdate(BaseModel):
    """Campos editables de un campus existente."""
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True, coerce_numbers_to_str=True)

    id: int = Field(..., description="ID del campus a actualizar")
    nombre: str = Field(..., min_length=1)
    telefono: Optional[str] = None
    fax: Optional[str] = None
    sitio_web: Optional[str] = None
    ciudad: int = Field(..., description="ID de la ciudad")


class UniversidadUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    id_universidad: int
    nombre_universidad: str = Field(..., min_length=1)
    campus: List[CampusUpdate] = Field(..., min_length=1)

    @field_validator("campus")
    @classmethod
    def _ids_unicos(cls, v):
        ids = [c.id for c in v]
        if len(ids) != len(set(ids)):
            raise ValueError("ids de campus repetidos")
        return v

    @classmethod
    def from_wire(cls, raw) -> "UniversidadUpdate":
        """Construye la estructura desde el string JSON del formulario."""
        try:
            items = json.loads(raw) if isinstance(raw, (str, bytes)) else raw
        except (TypeError, ValueError) as e:
            raise PayloadError([{"loc": ["infoUniversidad"], "msg": f"JSON inválido: {e}"}]) from e
        if not isinstance(items, list) or not items or not isinstance(items[0], dict):
            raise PayloadError([{"loc": ["infoUniversidad"], "msg": "se esperaba un arreglo no vacío"}])

        head = items[0]
        try:
            return cls.model_validate({
                "id_universidad": head.get("id_universidad"),
                "nombre_universidad": head.get("nombre_universidad"),
                "campus": items,
            })
        except ValidationError as e:
            raise PayloadError(
                [{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()]
            ) from e
