# runlog/services/training_aggregator.py
"""
Agregados de planes de entrenamiento.

Trabaja sobre objetos ya cargados en memoria (modelos SQLAlchemy o cualquier
objeto con los mismos atributos):
  plan:  date, entries, total_distance, completed_distance
  entry: day, workout_id, workout, completed, completed_at, actual_distance, notes

No lee el reloj ni la BD: "hoy"/"ahora" y la resolución de workouts los
inyecta quien llama.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterable, List, Optional

from runlog.errors import DuplicateDayError, WorkoutNotFoundError
from runlog.utils.calendario import DAYS_OF_WEEK, iso_week, week_bounds

logger = logging.getLogger(__name__)

__all__ = [
    "week_bounds",
    "weekly_summary",
    "recompute_plan_total",
    "recompute_completed_distance",
    "complete_entry",
    "group_by_iso_week",
]


def _identity(x):
    return x


def _as_date(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


# ---- resumen semanal ----
def weekly_summary(
    plans: Iterable[Any],
    today: date,
    render: Callable[[Any], Any] = _identity,
) -> Dict[str, Any]:
    """
    Resumen de la semana (lunes-domingo) que contiene `today`.

    Los planes fuera de la ventana se ignoran. Las entradas con un día que no
    es uno de los siete nombres canónicos cuentan en los totales pero no
    aparecen en `days`.
    """
    start, end = week_bounds(today)
    summary = {
        "week_start": start.isoformat(),
        "week_end": end.isoformat(),
        "total_planned_distance": 0.0,
        "total_completed_distance": 0.0,
        "workouts_planned": 0,
        "workouts_completed": 0,
        "days": {day: {"planned": [], "completed": []} for day in DAYS_OF_WEEK},
    }

    for plan in plans:
        plan_date = _as_date(plan.date)
        if plan_date is None or not (start <= plan_date <= end):
            continue

        summary["total_planned_distance"] += plan.total_distance or 0
        summary["total_completed_distance"] += plan.completed_distance or 0

        for entry in plan.entries:
            summary["workouts_planned"] += 1
            if entry.completed:
                summary["workouts_completed"] += 1

            bucket = summary["days"].get(entry.day)
            if bucket is None:
                continue
            rendered = render(entry)
            bucket["planned"].append(rendered)
            if entry.completed:
                bucket["completed"].append(rendered)

    return summary


# ---- totales de un plan ----
def recompute_plan_total(
    entries: Iterable[Any],
    resolve_workout: Callable[[Any], Optional[Any]],
) -> float:
    """
    Suma la distancia derivada de cada workout referenciado.

    Falla entera (sin resultado parcial) si dos entradas comparten día o si
    algún workout no se puede resolver.
    """
    seen = set()
    total = 0.0
    for entry in entries:
        if entry.day in seen:
            raise DuplicateDayError(entry.day)
        seen.add(entry.day)

        workout = resolve_workout(entry.workout_id)
        if workout is None:
            raise WorkoutNotFoundError(entry.workout_id)
        total += workout.total_distance or 0
    return total


def recompute_completed_distance(entries: Iterable[Any]) -> float:
    """Σ actual_distance (o 0) de las entradas completadas. Recalcula siempre desde cero."""
    return sum((e.actual_distance or 0) for e in entries if e.completed)


def complete_entry(plan, entry, actual_distance=None, notes=None, *, now: datetime):
    entry.completed = True
    entry.completed_at = now
    if actual_distance is not None:
        entry.actual_distance = actual_distance
    if notes is not None:
        entry.notes = notes

    plan.completed_distance = recompute_completed_distance(plan.entries)
    logger.debug(
        "entry %s/%s completed, plan completed_distance=%.2f",
        entry.day, entry.workout_id, plan.completed_distance,
    )
    return plan


# ---- agrupación por semana ISO ----
def group_by_iso_week(
    plans: Iterable[Any],
    render: Callable[[Any], Any] = _identity,
) -> List[Dict[str, Any]]:
    """
    Agrupa planes por semana ISO 8601 (año ISO + semana), en orden cronológico.
    `render` se aplica al workout de cada entrada.
    """
    buckets: Dict[tuple, Dict[str, Any]] = {}
    for plan in plans:
        key = iso_week(_as_date(plan.date))
        bucket = buckets.get(key)
        if bucket is None:
            bucket = buckets[key] = {
                "year": key[0],
                "week": key[1],
                "planned_distance": 0.0,
                "completed_distance": 0.0,
                "workouts": [],
            }
        bucket["planned_distance"] += plan.total_distance or 0
        bucket["completed_distance"] += plan.completed_distance or 0
        for entry in plan.entries:
            bucket["workouts"].append({
                "day": entry.day,
                "completed": bool(entry.completed),
                "workout": render(entry.workout),
            })

    return [buckets[k] for k in sorted(buckets)]
