from sqlalchemy import create_engine

from ome import db
from ome.database.seeds import CONTINENTES, PAIS_MAX, PAIS_MIN, ensure_admin, seed_ciudades, seed_continentes
from ome.database.session import make_session_factory
from ome.models import Asistente, Beneficio, Ciudad, Continente, PreUach, User, TIPO_ADMINISTRADOR


def test_seed_continentes_is_idempotent(app):
    # el fixture ya cargó los seis
    assert seed_continentes(db.session) == 0
    assert sorted(n for (n,) in db.session.query(Continente.nombre)) == sorted(CONTINENTES)


def test_seed_ciudades(app):
    antes = db.session.query(Ciudad).count()
    assert seed_ciudades(db.session, 25, seed=1234) == 25

    nuevas = db.session.query(Ciudad).filter(Ciudad.id > antes).all()
    assert len(nuevas) == 25
    for ciudad in nuevas:
        assert ciudad.nombre
        assert ciudad.codigo_postal
        assert PAIS_MIN <= ciudad.pais <= PAIS_MAX


def test_ensure_admin_promotes_existing_user(app):
    user = ensure_admin(db.session, "USUARIO@uach.cl", "nueva-clave")
    assert user.tipo_usuario == TIPO_ADMINISTRADOR
    assert user.check_password("nueva-clave")
    assert db.session.query(User).filter_by(email="usuario@uach.cl").count() == 1


def test_session_factory_outside_flask(app, tmp_path):
    uri = f"sqlite:///{tmp_path / 'ome.db'}"
    db.metadata.create_all(create_engine(uri))

    Session = make_session_factory(uri)
    session = Session()
    try:
        assert seed_continentes(session) == len(CONTINENTES)
        seed_ciudades(session, 5, seed=7)
        assert session.query(Ciudad).count() == 5
    finally:
        session.close()

    # la base de la aplicación no se toca
    assert db.session.query(Ciudad).count() == 5


def test_cli_seed(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["seed", "--ciudades", "3"])
    assert result.exit_code == 0, result.output
    assert "ciudades creadas: 3" in result.output
    assert db.session.query(Ciudad).count() == 8


def test_cli_create_admin(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["create-admin", "jefa@uach.cl", "clave-segura", "--name", "Jefa"])
    assert result.exit_code == 0, result.output
    db.session.expire_all()
    user = db.session.query(User).filter_by(email="jefa@uach.cl").one()
    assert user.is_admin
    assert user.name == "Jefa"


def test_cli_init_db_keeps_data(app):
    result = app.test_cli_runner().invoke(args=["init-db"])
    assert result.exit_code == 0
    assert "Esquema creado" in result.output
    assert db.session.query(Ciudad).count() == 5


def test_asistente_rows_cascade_on_delete(app):
    db.session.add_all([Beneficio(id=1, nombre="Beca"), PreUach(postulante=10, nombre="Ana")])
    db.session.flush()
    db.session.add_all([
        Asistente(beneficio=1, postulante=10),
        Asistente(beneficio=1, postulante=10),
    ])
    db.session.commit()

    db.session.delete(db.session.get(Beneficio, 1))
    db.session.commit()
    assert db.session.query(Asistente).count() == 0
    assert db.session.get(PreUach, 10) is not None
