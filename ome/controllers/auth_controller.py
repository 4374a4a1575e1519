"""Controlador de autenticación.

Define un Blueprint llamado ``auth`` con rutas para login y logout.
"""
from flask import (
    Blueprint,
    flash,
    redirect,
    render_template,
    request,
    url_for,
    current_app,
)
from flask_login import login_user, logout_user, current_user
from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, BooleanField, SubmitField
from wtforms.validators import DataRequired, Email, Length

from ome import db
from ome.models import User


# ---------------------------------------------------------------------------
# Blueprint
# ---------------------------------------------------------------------------

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")

# ---------------------------------------------------------------------------
# Formulario de Login
# ---------------------------------------------------------------------------


class LoginForm(FlaskForm):
    email = StringField(
        "Correo electrónico",
        validators=[DataRequired(), Email(), Length(max=255)],
        render_kw={"placeholder": "email@example.com"},
    )
    password = PasswordField(
        "Contraseña", validators=[DataRequired(), Length(min=4, max=255)]
    )
    remember = BooleanField("Recordarme")
    submit = SubmitField("Ingresar")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _safe_next(target):
    """Solo se aceptan rutas locales para ``next``."""
    if target and target.startswith("/") and not target.startswith("//"):
        return target
    return None


# ---------------------------------------------------------------------------
# Rutas
# ---------------------------------------------------------------------------


@auth_bp.get("/login")
def login_get():
    # Si ya está logueado redirigimos
    if current_user.is_authenticated:
        return redirect(url_for("index"))

    form = LoginForm()
    return render_template("auth/login.html", form=form, next=request.args.get("next", ""))


@auth_bp.post("/login")
def login_post():
    form = LoginForm(request.form)

    if not form.validate_on_submit():
        flash("Datos de formulario inválidos", "danger")
        return redirect(url_for("auth.login_get"))

    email = form.email.data.strip().lower()
    user = db.session.query(User).filter_by(email=email).first()

    if user and user.check_password(form.password.data):
        login_user(user, remember=form.remember.data)
        current_app.logger.info("Login correcto: %s", email)
        return redirect(_safe_next(request.form.get("next")) or url_for("index"))

    current_app.logger.warning("Login fallido: %s", email)
    flash("Credenciales incorrectas", "danger")
    return redirect(url_for("auth.login_get"))


@auth_bp.get("/logout")
def logout():
    logout_user()
    flash("Sesión finalizada", "info")
    return redirect(url_for("auth.login_get"))
