import json

import pytest

from ome.schemas import PayloadError, UniversidadUpdate


def _wire(*campus, id_universidad=1, nombre="UACH"):
    items = [dict(c) for c in campus]
    if items:
        items[0].update(id_universidad=id_universidad, nombre_universidad=nombre)
    return json.dumps(items)


def test_first_element_carries_university_fields():
    payload = UniversidadUpdate.from_wire(_wire(
        {"id": 3, "nombre": " Campus Isla Teja ", "ciudad": 2, "telefono": "63"},
        {"id": 4, "nombre": "Campus Miraflores", "ciudad": 2, "extra": "ignorado"},
    ))
    assert payload.id_universidad == 1
    assert payload.nombre_universidad == "UACH"
    assert [c.id for c in payload.campus] == [3, 4]
    assert payload.campus[0].nombre == "Campus Isla Teja"
    assert payload.campus[1].telefono is None


def test_accepts_already_decoded_list():
    items = json.loads(_wire({"id": 3, "nombre": "A", "ciudad": 1}))
    assert UniversidadUpdate.from_wire(items).campus[0].ciudad == 1


@pytest.mark.parametrize("raw", ["{no json", "[]", '{"id": 1}', "[1, 2]"])
def test_rejects_malformed_wire(raw):
    with pytest.raises(PayloadError) as exc:
        UniversidadUpdate.from_wire(raw)
    assert exc.value.errors[0]["loc"] == ["infoUniversidad"]


def test_missing_university_fields():
    raw = json.dumps([{"id": 3, "nombre": "A", "ciudad": 1}])
    with pytest.raises(PayloadError) as exc:
        UniversidadUpdate.from_wire(raw)
    locs = {tuple(e["loc"]) for e in exc.value.errors}
    assert ("id_universidad",) in locs
    assert ("nombre_universidad",) in locs


def test_blank_campus_name_is_rejected():
    with pytest.raises(PayloadError) as exc:
        UniversidadUpdate.from_wire(_wire({"id": 3, "nombre": "   ", "ciudad": 1}))
    assert exc.value.errors[0]["loc"][:3] == ["campus", 0, "nombre"]


def test_duplicate_campus_ids_are_rejected():
    with pytest.raises(PayloadError):
        UniversidadUpdate.from_wire(_wire(
            {"id": 3, "nombre": "A", "ciudad": 1},
            {"id": 3, "nombre": "B", "ciudad": 1},
        ))


def test_numeric_contact_fields_are_kept_as_text():
    payload = UniversidadUpdate.from_wire(_wire({"id": 3, "nombre": "A", "ciudad": 1, "telefono": 63221, "fax": 4}))
    assert payload.campus[0].telefono == "63221"
    assert payload.campus[0].fax == "4"
