# runlog/cli/seed.py
import click
from flask.cli import AppGroup
from runlog import db
from runlog.errors import ValidationError
from runlog.forms.training_payloads import parse_workout_payload
from runlog.models.user import User
from runlog.models.workout import Workout
from runlog.services.plan_rollups import plans_using, refresh_plans
from runlog.services.vdot_profile import resolve_workout_paces

seed_group = AppGroup("seed", help="Comandos de seed (datos iniciales)")

# ---- Plantillas por defecto. Los ritmos {"type"} se completan con los del usuario ----
DEFAULT_WORKOUTS = [
    {"workout_name": "Rodaje suave 8K", "estimated_duration": 45,
     "work": [{"type": "distance", "distance": {"value": 8, "unit": "km"}, "pace": {"type": "easy"}}]},
    {"workout_name": "Tirada larga 18K", "estimated_duration": 100,
     "work": [{"type": "distance", "distance": {"value": 18, "unit": "km"}, "pace": {"type": "easy"}}]},
    {"workout_name": "Series 6x1000", "estimated_duration": 60,
     "warm_up": {"distance": {"value": 2, "unit": "km"}, "pace": {"type": "easy"}},
     "work": [{"type": "distance", "distance": {"value": 1000, "unit": "m"},
               "pace": {"type": "interval"}, "repetitions": 6}],
     "cool_down": {"distance": {"value": 2, "unit": "km"}, "pace": {"type": "easy"}}},
    {"workout_name": "Tempo 20'", "estimated_duration": 50,
     "warm_up": {"distance": {"value": 2, "unit": "km"}, "pace": {"type": "easy"}},
     "work": [{"type": "time", "time": "20:00", "pace": {"type": "tempo"}}],
     "cool_down": {"distance": {"value": 2, "unit": "km"}, "pace": {"type": "easy"}}},
    {"workout_name": "Ritmo maratón 3x3K", "estimated_duration": 75,
     "warm_up": {"distance": {"value": 2, "unit": "km"}},
     "work": [{"type": "distance", "distance": {"value": 3, "unit": "km"},
               "pace": {"type": "marathon"}, "repetitions": 3}],
     "cool_down": {"distance": {"value": 1, "unit": "mi"}}},
]


def _without_paces(item: dict):
    """Copia sin ritmos, o None si algún bloque depende del ritmo (tiempo sin distancia)."""
    out = {k: v for k, v in item.items() if k not in ("warm_up", "work", "cool_down")}
    for key in ("warm_up", "cool_down"):
        if item.get(key):
            out[key] = {k: v for k, v in item[key].items() if k != "pace"}
    work = []
    for seg in item.get("work", []):
        if seg.get("type") == "time":
            return None
        work.append({k: v for k, v in seg.items() if k != "pace"})
    out["work"] = work
    return out


def _upsert_workouts(user: User, items):
    created, updated, skipped = 0, 0, 0
    for item in items:
        if user.vdot is None:
            item = _without_paces(item)
            if item is None:
                skipped += 1
                continue

        fields = parse_workout_payload(item)
        fields["warm_up"], fields["work"], fields["cool_down"] = resolve_workout_paces(
            user, fields.get("warm_up"), fields["work"], fields.get("cool_down")
        )
        fields["is_template"] = True

        obj = Workout.query.filter_by(user_id=user.id, workout_name=fields["workout_name"]).first()
        if obj:
            for k, v in fields.items():
                setattr(obj, k, v)
            # con otro VDOT cambia la distancia de los bloques por tiempo
            refresh_plans(plans_using(obj))
            updated += 1
        else:
            db.session.add(Workout(user_id=user.id, **fields))
            created += 1
    db.session.commit()
    return created, updated, skipped


@seed_group.command("workouts")
@click.option("--email", required=True, help="Email del usuario que recibe las plantillas.")
def seed_workouts(email):
    """
    Crea/actualiza workouts plantilla para un usuario (idempotente por nombre).
    Sin VDOT se omiten los ritmos y los bloques que solo se definen por tiempo.
    """
    user = User.query.filter_by(email=email.strip().lower()).first()
    if not user:
        click.secho(f"No existe el usuario: {email}", fg="red")
        return

    try:
        created, updated, skipped = _upsert_workouts(user, DEFAULT_WORKOUTS)
    except ValidationError as e:
        db.session.rollback()
        raise click.ClickException(e.message)

    click.secho(f"Hecho. Nuevos: {created}, Actualizados: {updated}, Omitidos: {skipped}", fg="green")
