# runlog/cli/vdot.py
import click
from flask.cli import AppGroup
from runlog.errors import ValidationError
from runlog.services.vdot_profile import parse_time_seconds
from runlog.utils.vdot import calculate_vdot, get_predicted_race_times, get_training_paces

vdot_group = AppGroup("vdot", help="Calculadora VDOT")


@vdot_group.command("calc")
@click.argument("distance_km", type=click.FloatRange(min=0, min_open=True))
@click.argument("time")
def vdot_calc(distance_km, time):
    """
    VDOT, ritmos y tiempos estimados a partir de una marca.
    TIME en segundos (1200) o HH:MM:SS (00:20:00).
    """
    try:
        seconds = parse_time_seconds(float(time) if time.replace(".", "", 1).isdigit() else time)
    except ValidationError as e:
        raise click.BadParameter(e.message, param_hint="TIME")

    vdot = calculate_vdot(distance_km, seconds)
    click.secho(f"VDOT: {vdot}", fg="green", bold=True)

    click.echo("Ritmos (min/km):")
    for name, pace in get_training_paces(vdot).items():
        click.echo(f"  {name:<11} {pace}")

    click.echo("Tiempos estimados:")
    for label, t in get_predicted_race_times(vdot).items():
        click.echo(f"  {label:<14} {t}")
