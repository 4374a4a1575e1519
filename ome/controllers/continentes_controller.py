"""Continentes controller: CRUD de continentes."""
import math
from flask import Blueprint, render_template, request, redirect, url_for, flash, current_app
from flask_login import login_required
from sqlalchemy.exc import IntegrityError

from ome import db
from ome.models import Continente, Pais, TIPO_ADMINISTRADOR
from ome.common.security import require_tipo

continentes_bp = Blueprint("continentes", __name__, url_prefix="/continentes")

NOMBRE_MAX = 9


# -------------------- LIST --------------------
@continentes_bp.get("/")
@login_required
def continentes_list():
    q = request.args.get("q", "").strip()
    query = db.session.query(Continente)
    if q:
        query = query.filter(Continente.nombre.ilike(f"%{q}%"))
    page = request.args.get("page", 1, type=int)
    per_page = current_app.config["PER_PAGE"]
    total = query.count()
    rows = (
        query.order_by(Continente.nombre)
        .limit(per_page)
        .offset((page - 1) * per_page)
        .all()
    )
    pages = math.ceil(total / per_page)
    return render_template("continentes/index.html", rows=rows, q=q, page=page, pages=pages)


# -------------------- FORM helper --------------------

def _form(row_id=None):
    row = db.session.get(Continente, row_id) if row_id else None
    if row_id and row is None:
        flash("Continente no encontrado", "warning")
        return redirect(url_for("continentes.continentes_list"))

    if request.method == "POST":
        nombre = request.form.get("nombre", "").strip()
        if not nombre:
            flash("El nombre es obligatorio", "warning")
        elif len(nombre) > NOMBRE_MAX:
            flash(f"El nombre admite como máximo {NOMBRE_MAX} caracteres", "warning")
        else:
            try:
                if not row:
                    row = Continente()
                    db.session.add(row)
                row.nombre = nombre
                db.session.commit()
                flash("Continente guardado", "success")
                return redirect(url_for("continentes.continentes_list"))
            except IntegrityError:
                db.session.rollback()
                flash("No se pudo guardar el continente", "danger")
    return render_template("continentes/create.html", row=row)


# -------------------- CREATE / UPDATE / DELETE --------------------

@continentes_bp.route("/new", methods=["GET", "POST"])
@login_required
@require_tipo(TIPO_ADMINISTRADOR)
def continente_new():
    return _form()


@continentes_bp.route("/<int:row_id>/edit", methods=["GET", "POST"])
@login_required
@require_tipo(TIPO_ADMINISTRADOR)
def continente_edit(row_id):
    return _form(row_id)


@continentes_bp.post("/<int:row_id>/delete")
@login_required
@require_tipo(TIPO_ADMINISTRADOR)
def continente_delete(row_id):
    row = db.session.get(Continente, row_id)
    if row:
        assigned = db.session.query(Pais).filter(Pais.continente == row_id).count()
        if assigned > 0:
            flash(f"No se puede eliminar: el continente tiene {assigned} país(es)", "danger")
            return redirect(url_for("continentes.continentes_list"))
        db.session.delete(row)
        db.session.commit()
        flash("Continente eliminado", "info")
    return redirect(url_for("continentes.continentes_list"))
