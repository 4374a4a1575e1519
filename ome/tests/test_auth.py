from ome import db
from ome.models import User, TIPO_ADMINISTRADOR, TIPO_USUARIO

ADMIN_EMAIL = "admin@uach.cl"
USER_EMAIL = "usuario@uach.cl"
PASSWORD = "secreto123"


def test_login_redirects_to_dashboard(anon_client):
    resp = anon_client.post("/auth/login", data={"email": ADMIN_EMAIL.upper(), "password": PASSWORD})
    assert resp.status_code == 302
    resp = anon_client.get("/", follow_redirects=True)
    assert resp.request.path == "/dashboard/"


def test_login_honours_local_next(anon_client):
    resp = anon_client.post(
        "/auth/login",
        data={"email": ADMIN_EMAIL, "password": PASSWORD, "next": "/universidades/"},
    )
    assert resp.headers["Location"].endswith("/universidades/")


def test_login_ignores_external_next(anon_client):
    resp = anon_client.post(
        "/auth/login",
        data={"email": ADMIN_EMAIL, "password": PASSWORD, "next": "//evil.example.com/"},
    )
    assert "evil" not in resp.headers["Location"]


def test_login_wrong_password(anon_client):
    resp = anon_client.post(
        "/auth/login", data={"email": ADMIN_EMAIL, "password": "otra-clave"}, follow_redirects=True
    )
    assert "Credenciales incorrectas" in resp.get_data(as_text=True)
    assert anon_client.get("/dashboard/").status_code == 302


def test_logout(client):
    resp = client.get("/auth/logout")
    assert resp.status_code == 302
    assert client.get("/dashboard/").status_code == 302


def test_anonymous_is_sent_to_login(anon_client):
    resp = anon_client.get("/universidades/")
    assert resp.status_code == 302
    assert "/auth/login" in resp.headers["Location"]


# -------------------- menú lateral y dashboard --------------------

def test_admin_sees_admin_sidebar(client):
    html = client.get("/dashboard/").get_data(as_text=True)
    assert "Usuarios" in html
    assert "Continentes" in html


def test_user_sees_user_sidebar(user_client):
    html = user_client.get("/dashboard/").get_data(as_text=True)
    assert "Universidades" in html
    assert "Usuarios" not in html


def test_user_model_password_and_role(app):
    user = db.session.query(User).filter_by(email=USER_EMAIL).one()
    assert user.check_password(PASSWORD)
    assert not user.check_password("x")
    assert not user.is_admin
    assert db.session.query(User).filter_by(email=ADMIN_EMAIL).one().is_admin


# -------------------- usuarios --------------------

def test_users_admin_only(user_client):
    assert user_client.get("/users/").status_code == 403


def test_users_list_filters_by_tipo(client):
    html = client.get(f"/users/?tipo={TIPO_USUARIO}").get_data(as_text=True)
    assert USER_EMAIL in html
    assert ADMIN_EMAIL not in html


def test_user_create_edit_delete(client):
    resp = client.post(
        "/users/new",
        data={"email": "Nuevo@uach.cl", "name": "Nuevo", "tipo_usuario": TIPO_USUARIO, "password": "clave-nueva"},
    )
    assert resp.status_code == 302
    nuevo = db.session.query(User).filter_by(email="nuevo@uach.cl").one()
    assert nuevo.check_password("clave-nueva")

    client.post(
        f"/users/{nuevo.id}/edit",
        data={"email": "nuevo@uach.cl", "name": "Renombrado", "tipo_usuario": TIPO_ADMINISTRADOR},
    )
    db.session.expire_all()
    nuevo = db.session.get(User, nuevo.id)
    assert nuevo.name == "Renombrado"
    assert nuevo.is_admin
    # sin contraseña se conserva la anterior
    assert nuevo.check_password("clave-nueva")

    client.post(f"/users/{nuevo.id}/delete")
    db.session.expire_all()
    assert db.session.get(User, nuevo.id) is None


def test_user_create_rejects_duplicate_email(client):
    client.post(
        "/users/new",
        data={"email": USER_EMAIL, "name": "Otro", "tipo_usuario": TIPO_USUARIO, "password": "abc12345"},
    )
    assert db.session.query(User).filter_by(email=USER_EMAIL).count() == 1


def test_user_cannot_delete_self(client):
    admin = db.session.query(User).filter_by(email=ADMIN_EMAIL).one()
    client.post(f"/users/{admin.id}/delete")
    db.session.expire_all()
    assert db.session.get(User, admin.id) is not None
