# runlog/services/vdot_profile.py
"""
Perfil VDOT del usuario.

Único camino para mutar user.vdot / user.training_paces:
  - apply_manual_vdot: valor fijado a mano (no toca calculated_from)
  - apply_performance: VDOT calculado a partir de una marca
Además resuelve los ritmos de los esfuerzos de un workout contra los ritmos
guardados del usuario.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, Optional, Tuple

from runlog.errors import ValidationError
from runlog.utils.vdot import (
    PACE_RE,
    calculate_vdot,
    get_predicted_race_times,
    get_training_paces,
    time_to_seconds,
)

logger = logging.getLogger(__name__)

EFFORT_PACE_TYPES = ("easy", "marathon", "tempo", "threshold", "interval", "repetition")

# "tempo" no tiene columna propia en la tabla: se entrena a ritmo umbral
_PACE_ALIASES = {"tempo": "threshold"}

PB_FIELDS_MESSAGE = "Distance, time, and date are required for personal bests"


# ---- entrada ----
def parse_time_seconds(value) -> float:
    """Segundos (número) o 'HH:MM:SS'."""
    if isinstance(value, bool):
        raise ValidationError("Time must be seconds or HH:MM:SS")
    if isinstance(value, (int, float)):
        seconds = float(value)
    elif isinstance(value, str):
        try:
            seconds = float(time_to_seconds(value))
        except ValueError as e:
            raise ValidationError(str(e)) from None
    else:
        raise ValidationError("Time must be seconds or HH:MM:SS")
    if seconds <= 0:
        raise ValidationError("Time must be positive")
    return seconds


def parse_positive_number(value, field: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise ValidationError(f"{field} must be a number")
    try:
        number = float(value)
    except ValueError:
        raise ValidationError(f"{field} must be a number") from None
    if number <= 0:
        raise ValidationError(f"{field} must be positive")
    return number


def parse_iso_date(value, field: str = "date") -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValidationError(f"Invalid {field} {value!r}: expected YYYY-MM-DD") from None


def parse_performance(payload: Optional[Dict[str, Any]]) -> Tuple[float, float, date]:
    """{distance, time, date} -> (km, segundos, fecha). Los tres son obligatorios."""
    payload = payload or {}
    distance = payload.get("distance", payload.get("distance_km"))
    time_value = payload.get("time", payload.get("time_seconds"))
    perf_date = payload.get("date")
    if distance in (None, "") or time_value in (None, "") or not perf_date:
        raise ValidationError(PB_FIELDS_MESSAGE)
    return (
        parse_positive_number(distance, "distance"),
        parse_time_seconds(time_value),
        parse_iso_date(perf_date),
    )


# ---- mutaciones ----
def apply_manual_vdot(user, value) -> int:
    vdot = parse_positive_number(value, "manual_vdot")
    if vdot != int(vdot):
        raise ValidationError("manual_vdot must be an integer")
    user.vdot = int(vdot)
    user.training_paces = get_training_paces(user.vdot)
    logger.info("user=%s manual vdot=%s", user.id, user.vdot)
    return user.vdot


def apply_performance(user, distance_km: float, time_seconds: float, perf_date: date) -> int:
    user.vdot = calculate_vdot(distance_km, time_seconds)
    user.training_paces = get_training_paces(user.vdot)
    user.vdot_calculated_from = {
        "distance_km": distance_km,
        "time_seconds": time_seconds,
        "date": perf_date.isoformat(),
    }
    logger.info("user=%s vdot=%s from %.3f km in %.0f s", user.id, user.vdot, distance_km, time_seconds)
    return user.vdot


def predictions_for(user) -> Dict[str, str]:
    if user.vdot is None:
        raise ValidationError("User has no VDOT value")
    return get_predicted_race_times(user.vdot)


# ---- ritmos de los esfuerzos ----
def resolve_effort_pace(user, effort: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """
    Si el esfuerzo lleva ritmo, exige que el usuario tenga VDOT y completa
    {"type": ...} sin "pace" con el ritmo guardado del usuario.
    Devuelve una copia; el original no se toca.
    """
    if not effort or not effort.get("pace"):
        return effort

    if user.vdot is None:
        raise ValidationError("User must have a VDOT value to use paces")

    effort = dict(effort)
    pace = effort["pace"]
    if isinstance(pace, str):
        pace = {"type": None, "pace": pace}
    else:
        pace = dict(pace)

    pace_type = pace.get("type")
    if pace_type is not None and pace_type not in EFFORT_PACE_TYPES:
        raise ValidationError(f"Invalid pace type {pace_type!r}")

    if not pace.get("pace"):
        if pace_type is None:
            raise ValidationError("Pace needs a type or an mm:ss value")
        key = _PACE_ALIASES.get(pace_type, pace_type)
        pace["pace"] = (user.training_paces or {}).get(key)
        if not pace["pace"]:
            raise ValidationError(f"No stored {key} pace for this user")
    elif not PACE_RE.match(pace["pace"]):
        raise ValidationError(f"Invalid pace {pace['pace']!r}: expected mm:ss")

    effort["pace"] = pace
    return effort


def resolve_workout_paces(user, warm_up, work, cool_down):
    return (
        resolve_effort_pace(user, warm_up),
        [resolve_effort_pace(user, w) for w in (work or [])],
        resolve_effort_pace(user, cool_down),
    )
