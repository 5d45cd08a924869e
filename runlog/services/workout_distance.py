# runlog/services/workout_distance.py
"""
Distancia total de un workout a partir de sus esfuerzos.

Cada esfuerzo (calentamiento, bloque de trabajo, vuelta a la calma) se
normaliza a una de tres variantes:
  - DistanceEffort: distancia explícita (km, m o mi)
  - PaceTimedEffort: tiempo "mm:ss" a un ritmo "mm:ss" por km
  - UnspecifiedEffort: ni distancia ni ritmo+tiempo -> aporta 0

Es un cálculo de lectura: no se guarda en BD, así siempre refleja los datos
actuales de los esfuerzos.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union

from runlog.utils.vdot import pace_to_seconds

logger = logging.getLogger(__name__)

UNIT_TO_KM = {"km": 1.0, "m": 0.001, "mi": 1.609344}


@dataclass(frozen=True)
class DistanceEffort:
    value: float
    unit: str = "km"


@dataclass(frozen=True)
class PaceTimedEffort:
    time: str
    pace: str


@dataclass(frozen=True)
class UnspecifiedEffort:
    pass


Effort = Union[DistanceEffort, PaceTimedEffort, UnspecifiedEffort]

UNSPECIFIED = UnspecifiedEffort()


@dataclass(frozen=True)
class WorkSegment:
    effort: Effort
    repetitions: int = 1


def _pace_string(pace: Any) -> Optional[str]:
    """El ritmo llega como {"type": .., "pace": "mm:ss"} o directamente "mm:ss"."""
    if isinstance(pace, dict):
        return pace.get("pace") or None
    if isinstance(pace, str):
        return pace or None
    return None


def _distance_of(raw: Dict[str, Any]):
    distance = raw.get("distance")
    if isinstance(distance, dict):
        return distance.get("value"), (distance.get("unit") or "km")
    if isinstance(distance, (int, float)) and not isinstance(distance, bool):
        return distance, (raw.get("unit") or "km")
    return None, "km"


def parse_effort(raw: Optional[Dict[str, Any]]) -> Effort:
    if not raw:
        return UNSPECIFIED

    value, unit = _distance_of(raw)
    if value:
        return DistanceEffort(float(value), unit)

    pace = _pace_string(raw.get("pace"))
    time_str = raw.get("time")
    if pace and time_str:
        return PaceTimedEffort(time_str, pace)

    # Se tolera (aporta 0), pero suele ser un error de carga de datos
    logger.warning("Effort without distance or pace/time, counted as 0: %r", raw)
    return UNSPECIFIED


def parse_work_segment(raw: Dict[str, Any]) -> WorkSegment:
    reps = (raw or {}).get("repetitions") or 1
    return WorkSegment(effort=parse_effort(raw), repetitions=int(reps))


def effort_distance(effort: Effort) -> float:
    """Distancia de un esfuerzo en km."""
    if isinstance(effort, DistanceEffort):
        try:
            factor = UNIT_TO_KM[effort.unit]
        except KeyError:
            raise ValueError(f"Unknown distance unit {effort.unit!r}") from None
        return effort.value * factor
    if isinstance(effort, PaceTimedEffort):
        return pace_to_seconds(effort.time) / pace_to_seconds(effort.pace)
    return 0.0


def total_distance(
    warm_up: Optional[Dict[str, Any]],
    work: Optional[Iterable[Dict[str, Any]]],
    cool_down: Optional[Dict[str, Any]],
) -> float:
    """calentamiento + Σ(bloque × repeticiones) + vuelta a la calma."""
    segments: List[WorkSegment] = [parse_work_segment(w) for w in (work or [])]
    total = effort_distance(parse_effort(warm_up))
    for seg in segments:
        total += effort_distance(seg.effort) * seg.repetitions
    total += effort_distance(parse_effort(cool_down))
    return total


def workout_total_distance(workout) -> float:
    """Acepta un modelo Workout o cualquier objeto con warm_up/work/cool_down."""
    return total_distance(
        getattr(workout, "warm_up", None),
        getattr(workout, "work", None),
        getattr(workout, "cool_down", None),
    )
