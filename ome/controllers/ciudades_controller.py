"""Ciudades controller: CRUD de ciudades y lookup por país."""
import math
from flask import Blueprint, render_template, request, redirect, url_for, flash, jsonify, current_app
from flask_login import login_required
from sqlalchemy.exc import IntegrityError

from ome import db
from ome.models import Ciudad, CampusSede, TIPO_ADMINISTRADOR
from ome.common.security import require_tipo

ciudades_bp = Blueprint("ciudades", __name__, url_prefix="/ciudades")


@ciudades_bp.get("/")
@login_required
def ciudades_list():
    q = request.args.get("q", "").strip()
    pais_filter = request.args.get("pais", type=int)

    query = db.session.query(Ciudad)
    if q:
        query = query.filter(Ciudad.nombre.ilike(f"%{q}%"))
    if pais_filter:
        query = query.filter(Ciudad.pais == pais_filter)

    page = request.args.get("page", 1, type=int)
    per_page = current_app.config["PER_PAGE"]
    total = query.count()
    ciudades = (
        query.order_by(Ciudad.nombre)
        .limit(per_page)
        .offset((page - 1) * per_page)
        .all()
    )
    pages = math.ceil(total / per_page)
    return render_template(
        "ciudades/index.html",
        ciudades=ciudades,
        pais_filter=pais_filter,
        q=q,
        page=page,
        pages=pages,
    )


@ciudades_bp.get("/por-pais/<int:pais_id>")
@login_required
def ciudades_por_pais(pais_id):
    rows = (
        db.session.query(Ciudad.id, Ciudad.nombre)
        .filter(Ciudad.pais == pais_id)
        .order_by(Ciudad.nombre)
        .all()
    )
    return jsonify([{"id": cid, "nombre": nombre} for cid, nombre in rows])


def _ciudad_form(ciudad_id=None):
    ciudad = db.session.get(Ciudad, ciudad_id) if ciudad_id else None
    if ciudad_id and ciudad is None:
        flash("Ciudad no encontrada", "warning")
        return redirect(url_for("ciudades.ciudades_list"))

    if request.method == "POST":
        nombre = request.form.get("nombre", "").strip()
        pais_id = request.form.get("pais", type=int)
        codigo_postal = request.form.get("codigo_postal", "").strip()
        if not nombre or not pais_id:
            flash("Nombre y país son obligatorios", "warning")
        else:
            try:
                if not ciudad:
                    ciudad = Ciudad()
                    db.session.add(ciudad)
                ciudad.nombre = nombre
                ciudad.pais = pais_id
                ciudad.codigo_postal = codigo_postal or None
                db.session.commit()
                flash("Ciudad guardada", "success")
                return redirect(url_for("ciudades.ciudades_list"))
            except IntegrityError:
                db.session.rollback()
                flash("No se pudo guardar la ciudad", "danger")

    return render_template("ciudades/create.html", ciudad=ciudad)


@ciudades_bp.route("/new", methods=["GET", "POST"])
@login_required
@require_tipo(TIPO_ADMINISTRADOR)
def ciudad_new():
    return _ciudad_form()


@ciudades_bp.route("/<int:ciudad_id>/edit", methods=["GET", "POST"])
@login_required
@require_tipo(TIPO_ADMINISTRADOR)
def ciudad_edit(ciudad_id):
    return _ciudad_form(ciudad_id)


@ciudades_bp.post("/<int:ciudad_id>/delete")
@login_required
@require_tipo(TIPO_ADMINISTRADOR)
def ciudad_delete(ciudad_id):
    ciudad = db.session.get(Ciudad, ciudad_id)
    if ciudad:
        # Verificar si algún campus está en esta ciudad
        assigned = db.session.query(CampusSede).filter(CampusSede.ciudad == ciudad_id).count()
        if assigned > 0:
            flash(f"No se puede eliminar: la ciudad tiene {assigned} campus", "danger")
            return redirect(url_for("ciudades.ciudades_list"))
        db.session.delete(ciudad)
        db.session.commit()
        flash("Ciudad eliminada", "info")
    return redirect(url_for("ciudades.ciudades_list"))
