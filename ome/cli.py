"""Comandos ``flask --app ome ...`` para esquema, datos de prueba y administrador."""
import click
from flask import current_app
from flask.cli import with_appcontext

from ome import db


def register_commands(app):
    app.cli.add_command(init_db_command)
    app.cli.add_command(seed_command)
    app.cli.add_command(create_admin_command)


@click.command("init-db")
@click.option("--drop", is_flag=True, help="Elimina las tablas antes de crearlas.")
@with_appcontext
def init_db_command(drop):
    """Crea las tablas de la aplicación."""
    from ome.database.schema import create_schema

    create_schema(drop=drop)
    click.echo("Esquema creado")


@click.command("seed")
@click.option("--ciudades", type=int, default=None, help="Cantidad de ciudades sintéticas.")
@click.option("--database-uri", default=None, help="Sembrar otra base fuera del contexto Flask.")
@with_appcontext
def seed_command(ciudades, database_uri):
    """Carga continentes y ciudades sintéticas."""
    from ome.database.seeds import seed_continentes, seed_ciudades, ensure_admin
    from ome.database.session import make_session_factory

    cfg = current_app.config
    cantidad = ciudades if ciudades is not None else cfg["SEED_CIUDADES"]
    session = make_session_factory(database_uri)() if database_uri else db.session
    try:
        creados = seed_continentes(session)
        seed_ciudades(session, cantidad, locale=cfg.get("FAKER_LOCALE"))
        if cfg.get("ADMIN_PASSWORD"):
            ensure_admin(session, cfg["ADMIN_EMAIL"], cfg["ADMIN_PASSWORD"])
    finally:
        if database_uri:
            session.close()
    click.echo(f"Continentes nuevos: {creados}; ciudades creadas: {cantidad}")


@click.command("create-admin")
@click.argument("email")
@click.argument("password")
@click.option("--name", default="Administrador")
@with_appcontext
def create_admin_command(email, password, name):
    """Crea o promueve un usuario administrador."""
    from ome.database.seeds import ensure_admin

    user = ensure_admin(db.session, email, password, name=name)
    click.echo(f"Administrador listo: {user.email}")
