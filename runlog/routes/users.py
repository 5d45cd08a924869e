# runlog/routes/users.py
from flask import Blueprint, current_app, jsonify, request
from flask_login import login_required, current_user, logout_user

from runlog import db
from runlog.errors import ForbiddenError, NotFoundError, ValidationError
from runlog.forms.user_forms import UserUpdateForm, UpcomingRaceForm, RecentRaceForm
from runlog.models.user import User, PersonalBest, UpcomingRace, RecentRace, PB_RACES
from runlog.services.vdot_profile import (
    apply_manual_vdot,
    apply_performance,
    parse_iso_date,
    parse_performance,
    predictions_for,
)
from runlog.utils.vdot import time_to_seconds

users_bp = Blueprint("users", __name__, url_prefix="/api/v1/users")


# -----------------------------------------------------------------------------#
# Helpers
# -----------------------------------------------------------------------------#
def _get_user(user_id: int) -> User:
    user = db.session.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def _own_account(user_id: int, action: str = "update") -> User:
    """Solo el propio usuario (o un admin) puede modificar la cuenta."""
    user = _get_user(user_id)
    if user.id != current_user.id and current_user.role != "admin":
        raise ForbiddenError(f"You can only {action} your own account!")
    return user


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Body must be a JSON object")
    return data


# -----------------------------------------------------------------------------#
# Cuenta
# -----------------------------------------------------------------------------#
@users_bp.route("/", methods=["GET"])
@login_required
def list_users():
    users = User.query.order_by(User.id).all()
    return jsonify({"data": [u.to_dict() for u in users]}), 200


@users_bp.route("/<int:user_id>", methods=["GET"])
@login_required
def get_user(user_id):
    return jsonify({"data": _get_user(user_id).to_dict()}), 200


@users_bp.route("/<int:user_id>", methods=["PUT"])
@login_required
def update_user(user_id):
    user = _own_account(user_id)
    form = UserUpdateForm()
    if not form.validate():
        return jsonify(error="ValidationError", fields=form.errors), 422

    if form.username.data:
        username = form.username.data.strip()
        taken = User.query.filter(User.username == username, User.id != user.id).first()
        if taken:
            return jsonify(error="AlreadyExists", message="Username already taken"), 409
        user.username = username
    if form.email.data:
        email = form.email.data.strip().lower()
        taken = User.query.filter(User.email == email, User.id != user.id).first()
        if taken:
            return jsonify(error="AlreadyExists", message="Email already taken"), 409
        user.email = email
    if form.password.data:
        user.set_password(form.password.data)
    if form.avatar.data:
        user.avatar = form.avatar.data.strip()

    db.session.commit()
    current_app.logger.info(f"[users] update user={user.id}")
    return jsonify({"data": user.to_dict()}), 200


@users_bp.route("/<int:user_id>", methods=["DELETE"])
@login_required
def delete_user(user_id):
    user = _own_account(user_id, action="delete")
    is_self = user.id == current_user.id
    db.session.delete(user)
    db.session.commit()
    if is_self:
        logout_user()
    current_app.logger.info(f"[users] delete user={user_id}")
    return jsonify({"data": {"deleted": True, "id": user_id}}), 200


# -----------------------------------------------------------------------------#
# VDOT
# -----------------------------------------------------------------------------#
@users_bp.route("/<int:user_id>/vdot", methods=["PUT"])
@login_required
def set_vdot(user_id):
    """
    Body JSON (uno de los dos):
      {"manual_vdot": 50}
      {"personal_best": {"distance": 5, "time": 1200 | "00:20:00", "date": "YYYY-MM-DD"}}
    Si llegan ambos, manda la marca (es la que deja calculated_from).
    """
    user = _own_account(user_id)
    data = _json_body()

    manual = data.get("manual_vdot")
    performance = data.get("personal_best")
    if manual in (None, "") and performance is None:
        raise ValidationError("manual_vdot or personal_best is required")

    if manual not in (None, ""):
        apply_manual_vdot(user, manual)
    if performance is not None:
        distance_km, time_seconds, perf_date = parse_performance(performance)
        apply_performance(user, distance_km, time_seconds, perf_date)

    db.session.commit()
    current_app.logger.info(f"[vdot] user={user.id} vdot={user.vdot}")
    return jsonify({"data": user.vdot_profile()}), 200


@users_bp.route("/<int:user_id>/vdot/predictions", methods=["GET"])
@login_required
def vdot_predictions(user_id):
    user = _get_user(user_id)
    return jsonify({"data": {"vdot": user.vdot, "predictions": predictions_for(user)}}), 200


# -----------------------------------------------------------------------------#
# Marcas y carreras
# -----------------------------------------------------------------------------#
@users_bp.route("/<int:user_id>/personal-bests", methods=["PUT"])
@login_required
def update_personal_bests(user_id):
    """
    Actualización parcial por tipo de carrera:
      {"five_k": {"time": "00:19:30", "date": "2024-04-01", "location": "Madrid"}, ...}
    Solo se tocan las carreras y campos presentes.
    """
    user = _own_account(user_id)
    data = _json_body()

    unknown = sorted(set(data) - set(PB_RACES))
    if unknown:
        raise ValidationError(f"Unknown race types: {', '.join(unknown)}")

    for race, fields in data.items():
        if not isinstance(fields, dict):
            raise ValidationError(f"{race} must be an object")
        pb = user.personal_best(race)
        if pb is None:
            pb = PersonalBest(race=race)
            user.personal_bests.append(pb)

        if fields.get("time"):
            try:
                pb.time_seconds = time_to_seconds(fields["time"])
            except ValueError:
                raise ValidationError(
                    f"Invalid time format for {race}. Please use HH:MM:SS format"
                ) from None
            pb.time = fields["time"].strip()
        if fields.get("date"):
            pb.date = parse_iso_date(fields["date"])
        if "location" in fields:
            pb.location = (fields.get("location") or "").strip() or None

    db.session.commit()
    current_app.logger.info(f"[pbs] user={user.id} races={','.join(data)}")
    return jsonify({"data": user.to_dict()["personal_bests"]}), 200


@users_bp.route("/<int:user_id>/upcoming-races", methods=["POST"])
@login_required
def add_upcoming_race(user_id):
    user = _own_account(user_id)
    form = UpcomingRaceForm()
    if not form.validate():
        return jsonify(error="ValidationError", fields=form.errors), 422

    race = UpcomingRace(
        name=form.name.data.strip(),
        date=form.date.data,
        projected_time=form.projected_time.data or None,
    )
    user.upcoming_races.append(race)
    db.session.commit()
    return jsonify({"data": race.to_dict()}), 201


@users_bp.route("/<int:user_id>/recent-races", methods=["POST"])
@login_required
def add_recent_race(user_id):
    user = _own_account(user_id)
    form = RecentRaceForm()
    if not form.validate():
        return jsonify(error="ValidationError", fields=form.errors), 422

    race = RecentRace(
        name=form.name.data.strip(),
        location=(form.location.data or "").strip() or None,
        distance=form.distance.data,
        time=form.time.data,
        time_seconds=time_to_seconds(form.time.data),
        date=form.date.data,
    )
    user.recent_races.append(race)
    db.session.commit()
    return jsonify({"data": race.to_dict()}), 201
