# runlog/cli/__init__.py
from runlog.commands import init_db
from .seed import seed_group
from .export import export_group
from .vdot import vdot_group


def register_cli(app):
    """Registra los grupos y comandos CLI de la app."""
    app.cli.add_command(init_db)
    app.cli.add_command(seed_group)
    app.cli.add_command(export_group)
    app.cli.add_command(vdot_group)
