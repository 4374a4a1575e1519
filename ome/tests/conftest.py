import pytest

from ome import create_app, db
from ome.config import TestingConfig
from ome.database.schema import create_schema
from ome.database.seeds import seed_continentes
from ome.models import Ciudad, Pais, Continente, User, TIPO_ADMINISTRADOR, TIPO_USUARIO

ADMIN_EMAIL = "admin@uach.cl"
USER_EMAIL = "usuario@uach.cl"
PASSWORD = "secreto123"
AJAX = {"X-Requested-With": "XMLHttpRequest"}


@pytest.fixture()
def app():
    app = create_app(TestingConfig)
    with app.app_context():
        create_schema()
        _seed_geografia()
        _seed_usuarios()
        yield app
        db.session.remove()
        db.drop_all()


def _seed_geografia():
    seed_continentes(db.session)
    america = db.session.query(Continente).filter_by(nombre="América").one()
    europa = db.session.query(Continente).filter_by(nombre="Europa").one()
    db.session.add_all([
        Pais(id=1, nombre="Chile", continente=america.id),
        Pais(id=2, nombre="Argentina", continente=america.id),
        Pais(id=3, nombre="España", continente=europa.id),
    ])
    db.session.add_all([
        Ciudad(id=1, nombre="Santiago", pais=1, codigo_postal="8320000"),
        Ciudad(id=2, nombre="Valdivia", pais=1, codigo_postal="5090000"),
        Ciudad(id=3, nombre="Mendoza", pais=2, codigo_postal="5500"),
        Ciudad(id=4, nombre="Madrid", pais=3, codigo_postal="28001"),
        Ciudad(id=5, nombre="Osorno", pais=1, codigo_postal="5290000"),
    ])
    db.session.commit()


def _seed_usuarios():
    admin = User(email=ADMIN_EMAIL, name="Admin", tipo_usuario=TIPO_ADMINISTRADOR)
    admin.set_password(PASSWORD)
    user = User(email=USER_EMAIL, name="Usuario", tipo_usuario=TIPO_USUARIO)
    user.set_password(PASSWORD)
    db.session.add_all([admin, user])
    db.session.commit()


def _login(client, email):
    resp = client.post("/auth/login", data={"email": email, "password": PASSWORD})
    assert resp.status_code == 302
    return client


@pytest.fixture()
def client(app):
    return _login(app.test_client(), ADMIN_EMAIL)


@pytest.fixture()
def user_client(app):
    return _login(app.test_client(), USER_EMAIL)


@pytest.fixture()
def anon_client(app):
    return app.test_client()


@pytest.fixture()
def ajax():
    return dict(AJAX)


@pytest.fixture()
def crear_universidad(client, ajax):
    """Crea una universidad con su primer campus vía /store y devuelve su id."""
    from ome.models import Universidad

    def _crear(nombre="UACH", ciudad=5, campus="Campus Central", **extra):
        data = {"nombre_universidad": nombre, "ciudad": ciudad, "nombre": campus, "telefono": "123"}
        data.update(extra)
        resp = client.post("/universidades/store", data=data, headers=ajax)
        assert resp.status_code == 200, resp.get_data(as_text=True)
        return db.session.query(Universidad.id).filter_by(nombre=nombre).order_by(Universidad.id.desc()).first()[0]

    return _crear
