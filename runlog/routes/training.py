# runlog/routes/training.py
from datetime import date, datetime

from flask import Blueprint, current_app, jsonify, request
from flask_login import login_required, current_user

from runlog import db
from runlog.errors import ForbiddenError, NotFoundError, ValidationError
from runlog.forms.training_payloads import parse_plan_payload, parse_workout_payload
from runlog.models.plan import PlanEntry, TrainingPlan
from runlog.models.workout import Workout
from runlog.services.plan_rollups import (
    delete_workout_and_refresh,
    plans_using,
    refresh_plans,
    workout_resolver,
)
from runlog.services.training_aggregator import (
    complete_entry,
    group_by_iso_week,
    recompute_completed_distance,
    recompute_plan_total,
    week_bounds,
    weekly_summary,
)
from runlog.services.vdot_profile import parse_iso_date, resolve_effort_pace

training_bp = Blueprint("training", __name__, url_prefix="/api/v1/training")


def _uid():
    return int(current_user.id)


# Reloj del servidor (los tests lo sustituyen con monkeypatch)
def _today() -> date:
    return date.today()


def _now() -> datetime:
    return datetime.utcnow()


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Body must be a JSON object")
    return data


def _check_owner(obj, what: str):
    if obj.user_id != _uid() and current_user.role != "admin":
        raise ForbiddenError(f"Not authorized to access this {what}")
    return obj


def _get_workout(workout_id: int) -> Workout:
    w = db.session.get(Workout, workout_id)
    if not w:
        raise NotFoundError("Workout not found")
    return _check_owner(w, "workout")


def _get_plan(plan_id: int) -> TrainingPlan:
    p = db.session.get(TrainingPlan, plan_id)
    if not p:
        raise NotFoundError("Training plan not found")
    return _check_owner(p, "plan")


def _render_entry(entry):
    return entry.to_dict()


def _render_workout(workout):
    return workout.to_dict() if workout is not None else None


# -----------------------------------------------------------------------------#
# Resumen semanal
# -----------------------------------------------------------------------------#
@training_bp.route("/summary", methods=["GET"])
@login_required
def summary():
    today = _today()
    start, end = week_bounds(today)
    plans = (
        TrainingPlan.query
        .filter(TrainingPlan.user_id == _uid(), TrainingPlan.date >= start, TrainingPlan.date <= end)
        .order_by(TrainingPlan.date)
        .all()
    )
    data = weekly_summary(plans, today, render=_render_entry)
    return jsonify({"data": data}), 200


# -----------------------------------------------------------------------------#
# Workouts
# -----------------------------------------------------------------------------#
def _apply_workout_fields(workout: Workout, fields: dict, owner) -> None:
    # un ritmo solo es válido si el dueño tiene VDOT; {"type"} se completa con sus ritmos
    if "warm_up" in fields:
        fields["warm_up"] = resolve_effort_pace(owner, fields["warm_up"])
    if "cool_down" in fields:
        fields["cool_down"] = resolve_effort_pace(owner, fields["cool_down"])
    if "work" in fields:
        fields["work"] = [resolve_effort_pace(owner, w) for w in fields["work"]]

    for attr, value in fields.items():
        setattr(workout, attr, value)


@training_bp.route("/workouts", methods=["POST"])
@login_required
def create_workout():
    fields = parse_workout_payload(_json_body())
    workout = Workout(user_id=_uid())
    _apply_workout_fields(workout, fields, current_user)

    db.session.add(workout)
    db.session.commit()
    current_app.logger.info(
        f"[workouts] create user={_uid()} workout={workout.id} total={workout.total_distance:.2f}"
    )
    return jsonify({"data": workout.to_dict()}), 201


@training_bp.route("/workouts", methods=["GET"])
@login_required
def list_workouts():
    q = Workout.query.filter_by(user_id=_uid())
    template = (request.args.get("template") or "").strip().lower()
    if template in ("1", "true", "yes"):
        q = q.filter(Workout.is_template.is_(True))
    elif template in ("0", "false", "no"):
        q = q.filter(Workout.is_template.is_(False))
    workouts = q.order_by(Workout.id).all()
    return jsonify({"data": [w.to_dict() for w in workouts], "count": len(workouts)}), 200


@training_bp.route("/workouts/<int:workout_id>", methods=["GET"])
@login_required
def get_workout(workout_id):
    return jsonify({"data": _get_workout(workout_id).to_dict()}), 200


@training_bp.route("/workouts/<int:workout_id>", methods=["PUT"])
@login_required
def update_workout(workout_id):
    workout = _get_workout(workout_id)
    fields = parse_workout_payload(_json_body(), partial=True)
    _apply_workout_fields(workout, fields, workout.user)

    # la distancia del workout cambia -> los planes que lo usan se recalculan
    plans = plans_using(workout)
    refresh_plans(plans)

    db.session.commit()
    current_app.logger.info(
        f"[workouts] update workout={workout.id} total={workout.total_distance:.2f} plans={len(plans)}"
    )
    return jsonify({"data": workout.to_dict()}), 200


@training_bp.route("/workouts/<int:workout_id>", methods=["DELETE"])
@login_required
def delete_workout(workout_id):
    workout = _get_workout(workout_id)

    # sus entradas caen por cascada; los planes que lo usaban se recalculan
    plans = delete_workout_and_refresh(workout)
    db.session.commit()
    current_app.logger.info(f"[workouts] delete workout={workout_id} plans={len(plans)}")
    return jsonify({"data": {"deleted": True, "id": workout_id}}), 200


# -----------------------------------------------------------------------------#
# Planes
# -----------------------------------------------------------------------------#
def _build_entries(raw_entries, user_id: int):
    """Entradas nuevas (aún fuera de sesión) + distancia total. Falla entera si algo no cuadra."""
    entries = [
        PlanEntry(day=e["day"], workout_id=e["workout_id"], comments=e["comments"], completed=False)
        for e in raw_entries
    ]
    total = recompute_plan_total(entries, workout_resolver(user_id))
    return entries, total


@training_bp.route("/plans", methods=["POST"])
@login_required
def create_plan():
    fields = parse_plan_payload(_json_body())
    entries, total = _build_entries(fields["entries"], _uid())

    plan = TrainingPlan(
        user_id=_uid(),
        date=fields["date"],
        week=fields["week"],
        total_distance=total,
        completed_distance=0.0,
    )
    plan.entries = entries
    db.session.add(plan)
    db.session.commit()

    current_app.logger.info(f"[plans] create user={_uid()} plan={plan.id} total={plan.total_distance:.2f}")
    return jsonify({"data": plan.to_dict()}), 201


@training_bp.route("/plans", methods=["GET"])
@login_required
def list_plans():
    q = TrainingPlan.query.filter(TrainingPlan.user_id == _uid())
    start = (request.args.get("start_date") or "").strip()
    end = (request.args.get("end_date") or "").strip()
    if start:
        q = q.filter(TrainingPlan.date >= parse_iso_date(start, "start_date"))
    if end:
        q = q.filter(TrainingPlan.date <= parse_iso_date(end, "end_date"))

    plans = q.order_by(TrainingPlan.date).all()
    return jsonify({
        "data": [p.to_dict() for p in plans],
        "count": len(plans),
        "weekly_summaries": group_by_iso_week(plans, render=_render_workout),
    }), 200


@training_bp.route("/plans/<int:plan_id>", methods=["GET"])
@login_required
def get_plan(plan_id):
    return jsonify({"data": _get_plan(plan_id).to_dict()}), 200


@training_bp.route("/plans/<int:plan_id>", methods=["PUT"])
@login_required
def update_plan(plan_id):
    plan = _get_plan(plan_id)
    fields = parse_plan_payload(_json_body(), partial=True)

    if "entries" in fields:
        entries, total = _build_entries(fields["entries"], plan.user_id)
        # vaciar y volcar antes de insertar: (plan_id, day) es único
        plan.entries.clear()
        db.session.flush()
        plan.entries.extend(entries)
        plan.total_distance = total
        plan.completed_distance = recompute_completed_distance(plan.entries)

    if "date" in fields:
        plan.date = fields["date"]
    if "week" in fields:
        plan.week = fields["week"]

    db.session.commit()
    current_app.logger.info(f"[plans] update plan={plan.id} total={plan.total_distance:.2f}")
    return jsonify({"data": plan.to_dict()}), 200


@training_bp.route("/plans/<int:plan_id>", methods=["DELETE"])
@login_required
def delete_plan(plan_id):
    plan = _get_plan(plan_id)
    db.session.delete(plan)
    db.session.commit()
    current_app.logger.info(f"[plans] delete plan={plan_id}")
    return jsonify({"data": {"deleted": True, "id": plan_id}}), 200


@training_bp.route("/plans/<int:plan_id>/complete", methods=["POST"])
@login_required
def complete_plan_entry(plan_id):
    """
    Body JSON: {"workout_id": 3, "day": "Tuesday"?, "actual_distance": 10.2?, "notes": "..."?}
    Sin "day" se marca la primera entrada del plan con ese workout.
    """
    plan = _get_plan(plan_id)
    data = _json_body()

    workout_id = data.get("workout_id")
    if not isinstance(workout_id, int) or isinstance(workout_id, bool):
        raise ValidationError("Plan ID and workout ID are required")

    actual = data.get("actual_distance")
    if actual is not None:
        if isinstance(actual, bool) or not isinstance(actual, (int, float)) or actual < 0:
            raise ValidationError("actual_distance must be a non-negative number")

    notes = data.get("notes")
    if notes is not None and not isinstance(notes, str):
        raise ValidationError("notes must be a string")

    entry = plan.entry_for(workout_id, data.get("day"))
    if entry is None:
        raise NotFoundError("Workout not found in this plan")

    complete_entry(plan, entry, actual_distance=actual, notes=notes, now=_now())
    db.session.commit()

    current_app.logger.info(
        f"[plans] complete plan={plan.id} day={entry.day} completed={plan.completed_distance:.2f}"
    )
    return jsonify({"data": plan.to_dict()}), 200
