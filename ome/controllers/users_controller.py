"""Users controller: ABM con paginación y filtro (solo administradores)."""
import math
from flask import (
    Blueprint,
    render_template,
    request,
    redirect,
    url_for,
    flash,
    current_app,
)
from flask_login import login_required, current_user

from ome import db
from sqlalchemy import or_
from ome.models import User, TIPOS_USUARIO, TIPO_ADMINISTRADOR, TIPO_USUARIO
from ome.common.security import require_tipo

users_bp = Blueprint("users", __name__, url_prefix="/users")


# ---------------------------------------------------------------------------
# Listado
# ---------------------------------------------------------------------------


@users_bp.get("/")
@login_required
@require_tipo(TIPO_ADMINISTRADOR)
def users_list():
    q = request.args.get("q", "").strip()
    tipo_filter = request.args.get("tipo", "").strip()

    query = db.session.query(User)
    if q:
        query = query.filter(
            or_(
                User.email.ilike(f"%{q}%"),
                User.name.ilike(f"%{q}%"),
            )
        )
    if tipo_filter:
        query = query.filter(User.tipo_usuario == tipo_filter)

    page = request.args.get("page", 1, type=int)
    per_page = current_app.config["PER_PAGE"]
    total = query.count()
    users = (
        query.order_by(User.email)
        .limit(per_page)
        .offset((page - 1) * per_page)
        .all()
    )
    pages = math.ceil(total / per_page)
    return render_template(
        "users/index.html",
        users=users,
        q=q,
        page=page,
        pages=pages,
        tipos=TIPOS_USUARIO,
        tipo_filter=tipo_filter,
    )


# ---------------------------------------------------------------------------
# Crear y editar
# ---------------------------------------------------------------------------


@users_bp.route("/new", methods=["GET", "POST"])
@login_required
@require_tipo(TIPO_ADMINISTRADOR)
def user_new():
    return _user_form()


@users_bp.route("/<int:user_id>/edit", methods=["GET", "POST"])
@login_required
@require_tipo(TIPO_ADMINISTRADOR)
def user_edit(user_id):
    return _user_form(user_id)


def _user_form(user_id=None):
    user = db.session.get(User, user_id) if user_id else None
    if user_id and user is None:
        flash("Usuario no encontrado", "warning")
        return redirect(url_for("users.users_list"))

    if request.method == "POST":
        email = request.form.get("email", "").strip().lower()
        name = request.form.get("name", "").strip()
        tipo = request.form.get("tipo_usuario", TIPO_USUARIO)
        password = request.form.get("password", "").strip()

        # Validations
        if not email or not name:
            flash("Email y nombre son obligatorios", "danger")
            return redirect(request.url)
        if tipo not in TIPOS_USUARIO:
            flash("Tipo de usuario inválido", "danger")
            return redirect(request.url)
        if user is None and not password:
            flash("La contraseña es obligatoria", "danger")
            return redirect(request.url)
        # Verificar duplicado de email
        existing = db.session.query(User).filter(User.email == email).first()
        if existing and (user is None or existing.id != user.id):
            flash("El email ya está registrado en otro usuario", "danger")
            return redirect(request.url)

        if user is None:
            user = User()
            db.session.add(user)

        user.email = email
        user.name = name
        user.tipo_usuario = tipo

        if password:
            user.set_password(password)

        db.session.commit()
        flash("Usuario guardado", "success")
        return redirect(url_for("users.users_list"))

    return render_template("users/create.html", user=user, tipos=TIPOS_USUARIO)


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------


@users_bp.post("/<int:user_id>/delete")
@login_required
@require_tipo(TIPO_ADMINISTRADOR)
def user_delete(user_id):
    if user_id == current_user.id:
        flash("No puedes eliminar tu propio usuario", "danger")
        return redirect(url_for("users.users_list"))
    user = db.session.get(User, user_id)
    if user:
        db.session.delete(user)
        db.session.commit()
        flash("Usuario eliminado", "info")
    return redirect(url_for("users.users_list"))
