"""Helpers de acceso: tipo de usuario, menú lateral y peticiones AJAX."""
from functools import wraps

from flask import abort, request
from flask_login import current_user

from ome.models import TIPO_ADMINISTRADOR, TIPO_USUARIO

SIDEBARS = {
    TIPO_ADMINISTRADOR: "intranet/sidebar_left_admin.html",
    TIPO_USUARIO: "intranet/sidebar_left_user.html",
}


def is_ajax() -> bool:
    return request.headers.get("X-Requested-With", "") == "XMLHttpRequest"


def sidebar_for(user):
    """Plantilla del menú lateral para el usuario, o None si es anónimo."""
    if not user or not user.is_authenticated:
        return None
    return SIDEBARS.get(getattr(user, "tipo_usuario", None), SIDEBARS[TIPO_USUARIO])


def has_tipo(user, *tipos: str) -> bool:
    return bool(user and user.is_authenticated and user.tipo_usuario in tipos)


def require_tipo(*tipos: str):
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            if not has_tipo(current_user, *tipos):
                abort(403)
            return func(*args, **kwargs)
        return wrapper
    return decorator


def ajax_required(func):
    """Rechaza con 400 ``no ajax`` las peticiones que no vienen de XMLHttpRequest."""
    @wraps(func)
    def wrapper(*args, **kwargs):
        if not is_ajax():
            return "no ajax", 400, {"Content-Type": "text/plain; charset=utf-8"}
        return func(*args, **kwargs)
    return wrapper
