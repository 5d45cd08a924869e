# runlog/utils/vdot.py
"""
Motor VDOT (Jack Daniels / Gilbert).

Funciones puras, sin I/O:
  - calculate_vdot: marca (km, segundos) -> VDOT entero
  - get_training_paces: VDOT -> ritmos de entrenamiento (tabla estática)
  - get_predicted_race_times: VDOT -> tiempos estimados en distancias estándar
  - conversiones "mm:ss" / "HH:MM:SS" <-> segundos

Precondición: distancia y tiempo positivos (lo valida quien llama).
"""
import math
import re
from typing import Dict

from runlog.utils.pace_table import PACE_TABLE

PACE_RE = re.compile(r"^(\d+):([0-5]\d)$")
RACE_TIME_RE = re.compile(r"^(\d{1,2}):([0-5]\d):([0-5]\d)$")

# Coeficientes de la regresión Daniels–Gilbert (VO2 en ml/kg/min, v en m/min)
_VO2_A = 0.000104
_VO2_B = 0.182258
_VO2_C = -4.6

RACE_DISTANCES_KM = {
    "800m": 0.8,
    "1500m": 1.5,
    "Mile": 1.609,
    "3000m": 3,
    "5K": 5,
    "10K": 10,
    "15K": 15,
    "Half Marathon": 21.0975,
    "Marathon": 42.195,
}


def _round_half_up(x: float) -> int:
    # mismo criterio que Math.round (round() de Python redondea al par)
    return int(math.floor(x + 0.5))


def percent_vo2max(time_minutes: float) -> float:
    """Fracción de VO2max sostenible según la duración del esfuerzo."""
    t = time_minutes
    if t <= 3.5:
        return 0.98
    if t <= 7:
        return 0.95 + (7 - t) * 0.01
    if t <= 30:
        return 0.90 + (30 - t) * 0.002
    if t <= 120:
        return 0.83 + (120 - t) * 0.000775
    return min(0.83, 0.80 + (180 - t) * 0.00005)


def oxygen_cost(velocity: float) -> float:
    """Coste de oxígeno (ml/kg/min) a una velocidad en m/min."""
    return _VO2_C + _VO2_B * velocity + _VO2_A * velocity * velocity


def calculate_vdot(distance_km: float, time_seconds: float) -> int:
    """
    VDOT a partir de una marca.

    calculate_vdot(5, 1200) -> 52   (47.4645 / 0.92 = 51.59)
    """
    time_minutes = time_seconds / 60
    velocity = distance_km * 1000 / time_minutes
    vo2 = oxygen_cost(velocity) / percent_vo2max(time_minutes)
    return _round_half_up(vo2)


def get_training_paces(vdot: float) -> Dict[str, str]:
    """
    Ritmos de la entrada de la tabla más cercana al VDOT dado.
    Recorre toda la tabla; en empate gana la primera entrada encontrada.
    Fuera de rango devuelve el extremo más cercano.
    """
    closest = PACE_TABLE[0]
    for entry in PACE_TABLE[1:]:
        if abs(entry.vdot - vdot) < abs(closest.vdot - vdot):
            closest = entry
    return dict(closest.paces)


def _race_percent(distance_km: float) -> float:
    if distance_km <= 3:
        return 0.98
    if distance_km <= 5:
        return 0.93
    if distance_km <= 10:
        return 0.90
    if distance_km <= 21.1:
        return 0.87
    return 0.83


def velocity_for_vo2(vo2: float) -> float:
    """Raíz positiva de A*v^2 + B*v + C = vo2 (m/min)."""
    disc = _VO2_B * _VO2_B - 4 * _VO2_A * (_VO2_C - vo2)
    return (-_VO2_B + math.sqrt(disc)) / (2 * _VO2_A)


def format_race_time(total_seconds: int) -> str:
    """H:MM:SS si pasa de una hora, si no M:SS."""
    hours, rest = divmod(int(total_seconds), 3600)
    minutes, seconds = divmod(rest, 60)
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def get_predicted_race_times(vdot: float) -> Dict[str, str]:
    """Tiempos estimados para las distancias estándar a un VDOT dado."""
    results = {}
    for label, km in RACE_DISTANCES_KM.items():
        velocity = velocity_for_vo2(vdot * _race_percent(km))
        minutes = km * 1000 / velocity
        results[label] = format_race_time(_round_half_up(minutes * 60))
    return results


# -------------------- conversiones de texto --------------------
def pace_to_seconds(pace: str) -> int:
    """'mm:ss' -> segundos (por unidad de distancia)."""
    m = PACE_RE.match((pace or "").strip())
    if not m:
        raise ValueError(f"Invalid pace {pace!r}: expected mm:ss")
    return int(m.group(1)) * 60 + int(m.group(2))


def seconds_to_pace(seconds: float) -> str:
    """segundos -> 'mm:ss' (minutos con al menos dos dígitos)."""
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


def time_to_seconds(time_str: str) -> int:
    """'HH:MM:SS' (marcas personales) -> segundos."""
    m = RACE_TIME_RE.match((time_str or "").strip())
    if not m:
        raise ValueError(f"Invalid time {time_str!r}: expected HH:MM:SS")
    h, mi, s = (int(g) for g in m.groups())
    return h * 3600 + mi * 60 + s


def seconds_to_time(seconds: float) -> str:
    """segundos -> 'HH:MM:SS'."""
    hours, rest = divmod(int(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{secs:02d}"
