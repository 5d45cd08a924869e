# runlog/forms/training_payloads.py
"""
Validación de payloads JSON anidados (workouts y planes).

WTForms trabaja con campos planos; los esfuerzos y las entradas de plan son
estructuras anidadas, así que se validan aquí a mano y se devuelven ya
normalizados. Cualquier fallo -> ValidationError (400).
"""
from typing import Any, Dict, List, Optional

from runlog.errors import ValidationError
from runlog.services.vdot_profile import parse_iso_date
from runlog.services.workout_distance import UNIT_TO_KM
from runlog.utils.calendario import DAYS_OF_WEEK
from runlog.utils.vdot import PACE_RE, pace_to_seconds

WORK_TYPES = ("distance", "time")
COMMENT_MAX = 250


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _mmss(value, field: str, allow_zero: bool = True) -> str:
    if not isinstance(value, str) or not PACE_RE.match(value.strip()):
        raise ValidationError(f"Invalid {field} {value!r}: expected mm:ss")
    value = value.strip()
    if not allow_zero and pace_to_seconds(value) == 0:
        raise ValidationError(f"{field} must be greater than 00:00")
    return value


# ---- esfuerzos ----
def _distance(raw, field: str) -> Dict[str, Any]:
    if _is_number(raw):
        raw = {"value": raw}
    if not isinstance(raw, dict):
        raise ValidationError(f"{field}.distance must be an object {{value, unit}}")
    value = raw.get("value")
    unit = raw.get("unit") or "km"
    if not _is_number(value) or value <= 0:
        raise ValidationError(f"{field}.distance.value must be a positive number")
    if unit not in UNIT_TO_KM:
        raise ValidationError(f"{field}.distance.unit must be one of {', '.join(UNIT_TO_KM)}")
    return {"value": value, "unit": unit}


def _pace(raw, field: str) -> Dict[str, Any]:
    if isinstance(raw, str):
        raw = {"pace": raw}
    if not isinstance(raw, dict):
        raise ValidationError(f"{field}.pace must be an object {{type, pace}}")
    pace = {"type": raw.get("type")}
    if raw.get("pace"):
        pace["pace"] = _mmss(raw["pace"], f"{field}.pace", allow_zero=False)
    return pace


def parse_effort_payload(raw, field: str) -> Optional[Dict[str, Any]]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValidationError(f"{field} must be an object")

    effort: Dict[str, Any] = {}
    if raw.get("time") not in (None, ""):
        effort["time"] = _mmss(raw["time"], f"{field}.time")
    if raw.get("distance") is not None:
        effort["distance"] = _distance(raw["distance"], field)
    if raw.get("pace"):
        effort["pace"] = _pace(raw["pace"], field)
    return effort


def parse_work_payload(raw, index: int) -> Dict[str, Any]:
    field = f"work[{index}]"
    if not isinstance(raw, dict):
        raise ValidationError(f"{field} must be an object")
    effort = parse_effort_payload(raw, field)

    work_type = raw.get("type") or ("distance" if "distance" in effort else "time")
    if work_type not in WORK_TYPES:
        raise ValidationError(f"{field}.type must be distance or time")
    if work_type == "distance" and "distance" not in effort:
        raise ValidationError(f"{field}: distance segments need a distance")
    if work_type == "time" and "time" not in effort:
        raise ValidationError(f"{field}: time segments need a time")

    reps = raw.get("repetitions", 1)
    if reps is None:
        reps = 1
    if not isinstance(reps, int) or isinstance(reps, bool) or reps < 1:
        raise ValidationError(f"{field}.repetitions must be an integer >= 1")

    effort["type"] = work_type
    effort["repetitions"] = reps
    return effort


# ---- workout ----
def parse_workout_payload(data, partial: bool = False) -> Dict[str, Any]:
    """Campos normalizados de un workout. Con partial=True solo los presentes."""
    if not isinstance(data, dict):
        raise ValidationError("Body must be a JSON object")

    out: Dict[str, Any] = {}
    if "workout_name" in data or not partial:
        name = (data.get("workout_name") or "").strip() if isinstance(data.get("workout_name"), str) else ""
        if not 2 <= len(name) <= 50:
            raise ValidationError("workout_name must be 2-50 characters")
        out["workout_name"] = name

    if data.get("estimated_duration") is not None:
        duration = data["estimated_duration"]
        if not isinstance(duration, int) or isinstance(duration, bool) or duration < 0:
            raise ValidationError("estimated_duration must be a non-negative integer (minutes)")
        out["estimated_duration"] = duration

    if "is_template" in data:
        out["is_template"] = bool(data["is_template"])

    if "warm_up" in data:
        out["warm_up"] = parse_effort_payload(data["warm_up"], "warm_up")
    if "cool_down" in data:
        out["cool_down"] = parse_effort_payload(data["cool_down"], "cool_down")
    if "work" in data:
        work = data["work"] or []
        if not isinstance(work, list):
            raise ValidationError("work must be a list")
        out["work"] = [parse_work_payload(w, i) for i, w in enumerate(work)]
    elif not partial:
        out["work"] = []

    return out


# ---- plan ----
def parse_plan_entries(raw) -> List[Dict[str, Any]]:
    if not isinstance(raw, list) or not raw:
        raise ValidationError("workouts must be a non-empty list")

    entries = []
    for i, item in enumerate(raw):
        field = f"workouts[{i}]"
        if not isinstance(item, dict):
            raise ValidationError(f"{field} must be an object")
        day = item.get("day")
        if day not in DAYS_OF_WEEK:
            raise ValidationError(f"{field}.day must be one of {', '.join(DAYS_OF_WEEK)}")
        workout_id = item.get("workout_id", item.get("workout"))
        if not isinstance(workout_id, int) or isinstance(workout_id, bool):
            raise ValidationError(f"{field}.workout_id is required")
        comments = item.get("comments") or []
        if isinstance(comments, str):
            comments = [comments]
        if not isinstance(comments, list) or any(
            not isinstance(c, str) or len(c) > COMMENT_MAX for c in comments
        ):
            raise ValidationError(f"{field}.comments must be strings of at most {COMMENT_MAX} characters")
        entries.append({"day": day, "workout_id": workout_id, "comments": comments})
    return entries


def parse_plan_payload(data, partial: bool = False) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise ValidationError("Body must be a JSON object")

    out: Dict[str, Any] = {}
    if "date" in data or not partial:
        if not data.get("date"):
            raise ValidationError("date is required")
        out["date"] = parse_iso_date(data["date"])

    if "week" in data or not partial:
        week = data.get("week")
        if not isinstance(week, int) or isinstance(week, bool) or week < 1:
            raise ValidationError("week must be an integer >= 1")
        out["week"] = week

    if "workouts" in data or not partial:
        out["entries"] = parse_plan_entries(data.get("workouts"))
    return out
