"""Universidades controller: universidades y sus campus/sedes.

Las escrituras solo se aceptan por AJAX (cabecera ``X-Requested-With``).
"""
from flask import Blueprint, render_template, request, redirect, url_for, flash, jsonify
from flask_login import login_required
from flask_wtf import FlaskForm
from wtforms import StringField, IntegerField
from wtforms.validators import DataRequired, Length, Optional

from ome.common.security import ajax_required, is_ajax
from ome.schemas import PayloadError, UniversidadUpdate
from ome.services import universidad_service as svc
from ome.services.universidad_service import RegistroNoEncontrado, UniversidadError

universidades_bp = Blueprint("universidades", __name__, url_prefix="/universidades")


# ---------------------------------------------------------------------------
# Formularios
# ---------------------------------------------------------------------------

class CampusFieldsMixin:
    nombre = StringField("Nombre campus", validators=[DataRequired(), Length(max=255)])
    telefono = StringField("Teléfono", validators=[Optional(), Length(max=50)])
    fax = StringField("Fax", validators=[Optional(), Length(max=50)])
    sitio_web = StringField("Sitio web", validators=[Optional(), Length(max=255)])
    ciudad = IntegerField("Ciudad", validators=[DataRequired()])


class UniversidadForm(CampusFieldsMixin, FlaskForm):
    nombre_universidad = StringField("Universidad", validators=[DataRequired(), Length(max=255)])
    pais = IntegerField("País", validators=[Optional()])


class CampusForm(CampusFieldsMixin, FlaskForm):
    universidad = IntegerField("Universidad", validators=[DataRequired()])


def _campus_data(form):
    return {
        "nombre": form.nombre.data.strip(),
        "telefono": form.telefono.data or None,
        "fax": form.fax.data or None,
        "sitio_web": form.sitio_web.data or None,
        "ciudad": form.ciudad.data,
    }


# ---------------------------------------------------------------------------
# Errores
# ---------------------------------------------------------------------------

def _error(message, status):
    if is_ajax() or request.is_json:
        return jsonify(message=message), status
    template = "errors/404.html" if status == 404 else "errors/500.html"
    return render_template(template, message=message), status


@universidades_bp.errorhandler(RegistroNoEncontrado)
def _not_found(e):
    return _error(str(e), 404)


@universidades_bp.errorhandler(UniversidadError)
def _failed(e):
    return _error(str(e), 500)


# ---------------------------------------------------------------------------
# Vistas
# ---------------------------------------------------------------------------

@universidades_bp.get("/")
@login_required
def index():
    return render_template("universidades/index.html")


@universidades_bp.get("/create")
@login_required
def create():
    return render_template(
        "universidades/create.html",
        form=UniversidadForm(),
        continentes=svc.lookup_continentes(),
    )


@universidades_bp.get("/edit/<int:universidad_id>")
@login_required
def edit(universidad_id):
    universidad = svc.obtener_para_editar(universidad_id)
    info = [universidad.to_dict(depth=2)]
    continentes = svc.lookup_continentes()
    if is_ajax():
        return jsonify(infoUniversidad=info, continentes=continentes, idUniversidad=universidad_id)
    return render_template(
        "universidades/edit.html",
        continentes=continentes,
        infoUniversidad=info,
        idUniversidad=universidad_id,
    )


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------

@universidades_bp.get("/universidad-campus")
@login_required
def universidad_campus():
    return jsonify(data=[u.to_dict(depth=1) for u in svc.listar_con_campus()])


@universidades_bp.post("/universidad-by-pais")
@login_required
@ajax_required
def universidad_by_pais():
    pais_id = request.values.get("idBuscar", type=int)
    if pais_id is None:
        return jsonify(errors={"idBuscar": ["Debe indicar un país"]}), 422
    return jsonify([u.to_dict() for u in svc.filtrar_por_pais(pais_id)])


@universidades_bp.post("/store")
@login_required
@ajax_required
def store():
    form = UniversidadForm()
    if not form.validate_on_submit():
        return jsonify(errors=form.errors), 422
    svc.crear_con_campus(form.nombre_universidad.data.strip(), _campus_data(form), pais=form.pais.data)
    return jsonify(message="se Guardó la universidad Correctamente")


@universidades_bp.post("/store-campus")
@login_required
@ajax_required
def store_campus():
    form = CampusForm()
    if not form.validate_on_submit():
        return jsonify(errors=form.errors), 422
    data = _campus_data(form)
    data["universidad"] = form.universidad.data
    return jsonify([c.to_dict() for c in svc.agregar_campus(data)])


@universidades_bp.post("/update")
@login_required
@ajax_required
def update():
    try:
        payload = UniversidadUpdate.from_wire(request.form.get("infoUniversidad"))
    except PayloadError as e:
        return jsonify(errors=e.errors), 422
    svc.actualizar_masivo(payload)
    return jsonify(message="la Universidad se actualizó correctamente")


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

def _deleted(message):
    if is_ajax():
        return jsonify(message=message)
    flash(message, "info")
    return redirect(url_for("universidades.index"))


@universidades_bp.route("/destroy/<int:universidad_id>", methods=["DELETE", "POST"])
@login_required
def destroy(universidad_id):
    return _deleted(svc.eliminar_universidad(universidad_id))


@universidades_bp.route("/destroy-campus/<int:campus_id>", methods=["DELETE", "POST"])
@login_required
def destroy_campus(campus_id):
    return _deleted(svc.eliminar_campus(campus_id))
