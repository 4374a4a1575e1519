"""Paises controller: CRUD de países y lookup por continente."""
import math
from flask import Blueprint, render_template, request, redirect, url_for, flash, jsonify, current_app
from flask_login import login_required
from sqlalchemy.exc import IntegrityError

from ome import db
from ome.models import Continente, Pais, Ciudad, TIPO_ADMINISTRADOR
from ome.common.security import require_tipo

paises_bp = Blueprint("paises", __name__, url_prefix="/paises")


def _continentes():
    return db.session.query(Continente).order_by(Continente.nombre).all()


# ---------------------------------------------------------------------------
# List
# ---------------------------------------------------------------------------

@paises_bp.get("/")
@login_required
def paises_list():
    q = request.args.get("q", "").strip()
    continente_filter = request.args.get("continente", type=int)

    query = db.session.query(Pais)
    if q:
        query = query.filter(Pais.nombre.ilike(f"%{q}%"))
    if continente_filter:
        query = query.filter(Pais.continente == continente_filter)

    page = request.args.get("page", 1, type=int)
    per_page = current_app.config["PER_PAGE"]
    total = query.count()
    paises = (
        query.order_by(Pais.nombre)
        .limit(per_page)
        .offset((page - 1) * per_page)
        .all()
    )
    pages = math.ceil(total / per_page)
    continentes = _continentes()
    return render_template(
        "paises/index.html",
        paises=paises,
        continentes=continentes,
        continentes_lookup={c.id: c.nombre for c in continentes},
        continente_filter=continente_filter,
        q=q,
        page=page,
        pages=pages,
    )


@paises_bp.get("/por-continente/<int:continente_id>")
@login_required
def paises_por_continente(continente_id):
    """Países de un continente para selects encadenados."""
    rows = (
        db.session.query(Pais.id, Pais.nombre)
        .filter(Pais.continente == continente_id)
        .order_by(Pais.nombre)
        .all()
    )
    return jsonify([{"id": pid, "nombre": nombre} for pid, nombre in rows])


# ---------------------------------------------------------------------------
# Create & Edit helper
# ---------------------------------------------------------------------------

def _pais_form(pais_id=None):
    pais = db.session.get(Pais, pais_id) if pais_id else None
    if pais_id and pais is None:
        flash("País no encontrado", "warning")
        return redirect(url_for("paises.paises_list"))

    if request.method == "POST":
        nombre = request.form.get("nombre", "").strip()
        continente_id = request.form.get("continente", type=int)
        if not nombre or not continente_id:
            flash("Nombre y continente son obligatorios", "warning")
        elif db.session.get(Continente, continente_id) is None:
            flash("El continente indicado no existe", "warning")
        else:
            try:
                if not pais:
                    pais = Pais()
                    db.session.add(pais)
                pais.nombre = nombre
                pais.continente = continente_id
                db.session.commit()
                flash("País guardado", "success")
                return redirect(url_for("paises.paises_list"))
            except IntegrityError:
                db.session.rollback()
                flash("No se pudo guardar el país", "danger")

    return render_template("paises/create.html", pais=pais, continentes=_continentes())


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@paises_bp.route("/new", methods=["GET", "POST"])
@login_required
@require_tipo(TIPO_ADMINISTRADOR)
def pais_new():
    return _pais_form()


@paises_bp.route("/<int:pais_id>/edit", methods=["GET", "POST"])
@login_required
@require_tipo(TIPO_ADMINISTRADOR)
def pais_edit(pais_id):
    return _pais_form(pais_id)


@paises_bp.post("/<int:pais_id>/delete")
@login_required
@require_tipo(TIPO_ADMINISTRADOR)
def pais_delete(pais_id):
    pais = db.session.get(Pais, pais_id)
    if pais:
        assigned = db.session.query(Ciudad).filter(Ciudad.pais == pais_id).count()
        if assigned > 0:
            flash(f"No se puede eliminar: el país tiene {assigned} ciudad(es)", "danger")
            return redirect(url_for("paises.paises_list"))
        db.session.delete(pais)
        db.session.commit()
        flash("País eliminado", "info")
    return redirect(url_for("paises.paises_list"))
