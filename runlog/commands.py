# runlog/commands.py

import click
from flask.cli import with_appcontext
from runlog import db


@click.command("init-db")
@click.option("--drop", is_flag=True, help="Borra las tablas antes de crearlas.")
@with_appcontext
def init_db(drop):
    """
    Crea las tablas que falten (para entornos sin migraciones).
    """
    if drop:
        db.drop_all()
        click.secho("Tablas borradas.", fg="yellow")
    db.create_all()
    click.secho("Base de datos lista.", fg="green")
