"""Dashboard Controller: portada de la intranet con totales."""
from flask import Blueprint, render_template
from flask_login import login_required

from ome import db
from ome.models import Universidad, CampusSede, Pais, Ciudad

# ---------------------------------------------------------------------------
# Blueprint
# ---------------------------------------------------------------------------

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/dashboard")


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------


@dashboard_bp.get("/")
@login_required
def dashboard_home():
    totales = {
        "universidades": db.session.query(Universidad).count(),
        "campus": db.session.query(CampusSede).count(),
        "paises": db.session.query(Pais).count(),
        "ciudades": db.session.query(Ciudad).count(),
    }
    return render_template("intranet/dashboard.html", totales=totales)
