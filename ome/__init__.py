from flask import Flask, jsonify, redirect, url_for
from flask_login import current_user
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_bcrypt import Bcrypt
from flask_wtf.csrf import CSRFProtect
from dotenv import load_dotenv

from .config import Config

# Extensiones globales
load_dotenv()

db = SQLAlchemy()
login_manager = LoginManager()
bcrypt = Bcrypt()
csrf = CSRFProtect()

login_manager.login_view = "auth.login_get"
login_manager.login_message = "Debes iniciar sesión para continuar"
login_manager.login_message_category = "warning"


@login_manager.user_loader
def load_user(user_id):
    """Carga un usuario por ID para Flask-Login (usa tabla `users`)."""
    from .models import User  # import tardío para evitar circular
    return db.session.get(User, int(user_id))


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    db.init_app(app)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    csrf.init_app(app)

    with app.app_context():
        from . import models  # noqa: F401  registra las tablas en db.metadata
        from .database.schema import register_sqlite_pragmas
        register_sqlite_pragmas()

    # ---- menú lateral según tipo de usuario ----
    from .common.security import is_ajax, sidebar_for

    @app.context_processor
    def _inject_sidebar():
        return dict(sidebar_template=sidebar_for(current_user))

    # Import blueprints here to avoid circular dependencies
    from .controllers.auth_controller import auth_bp
    from .controllers.dashboard_controller import dashboard_bp
    from .controllers.users_controller import users_bp
    from .controllers.continentes_controller import continentes_bp
    from .controllers.paises_controller import paises_bp
    from .controllers.ciudades_controller import ciudades_bp
    from .controllers.universidades_controller import universidades_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(continentes_bp)
    app.register_blueprint(paises_bp)
    app.register_blueprint(ciudades_bp)
    app.register_blueprint(universidades_bp)

    from .cli import register_commands
    register_commands(app)

    # ---- manejadores de error ----
    from flask import render_template, request

    @app.errorhandler(403)
    def _forbidden(err):
        if not current_user.is_authenticated:
            return redirect(url_for("auth.login_get", next=request.path))
        if is_ajax():
            return jsonify(message="No autorizado"), 403
        return render_template("errors/403.html"), 403

    @app.errorhandler(404)
    def _not_found(err):
        message = getattr(err, "description", None) or "Recurso no encontrado"
        if is_ajax() or request.is_json:
            return jsonify(message=message), 404
        return render_template("errors/404.html", message=message), 404

    @app.route("/")
    def index():
        if current_user.is_authenticated:
            return redirect(url_for("dashboard.dashboard_home"))
        return redirect(url_for("auth.login_get"))

    return app
