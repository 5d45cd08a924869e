# runlog/utils/calendario.py
"""
Utilidades de calendario: días, semanas y meses entre fechas.

Las semanas empiezan en lunes. Ninguna función lee el reloj del sistema:
la fecha de referencia ("hoy") siempre la pasa quien llama.
"""
from datetime import date, timedelta
from typing import List, Tuple

DAYS_OF_WEEK = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

Range = Tuple[date, date]


def day_of_week(d: date) -> str:
    return DAYS_OF_WEEK[d.weekday()]


def week_bounds(today: date) -> Range:
    """
    Lunes y domingo de la semana que contiene `today`.
    Equivale a start = today - ((dow + 6) % 7) con domingo = 0.
    """
    start = today - timedelta(days=today.weekday())
    return start, start + timedelta(days=6)


def iso_week(d: date) -> Tuple[int, int]:
    """(año ISO, semana ISO). La semana 1 es la que contiene el primer jueves."""
    iso = d.isocalendar()
    return iso[0], iso[1]


def iso_week_number(d: date) -> int:
    return iso_week(d)[1]


def _last_day_of_month(d: date) -> date:
    first_next = (d.replace(day=28) + timedelta(days=4)).replace(day=1)
    return first_next - timedelta(days=1)


def month_bounds(today: date) -> Range:
    return today.replace(day=1), _last_day_of_month(today)


def year_bounds(today: date) -> Range:
    return date(today.year, 1, 1), date(today.year, 12, 31)


def generate_days(start: date, end: date) -> List[date]:
    days = []
    current = start
    while current <= end:
        days.append(current)
        current += timedelta(days=1)
    return days


def generate_weeks(start: date, end: date) -> List[Range]:
    """Tramos de 7 días desde `start`; el último se recorta a `end`."""
    weeks = []
    current = start
    while current <= end:
        weeks.append((current, min(current + timedelta(days=6), end)))
        current += timedelta(days=7)
    return weeks


def generate_months(start: date, end: date) -> List[Range]:
    """Tramos por mes natural; el primero empieza en `start` y el último acaba en `end`."""
    months = []
    current = start
    while current <= end:
        month_end = min(_last_day_of_month(current), end)
        months.append((current, month_end))
        current = month_end + timedelta(days=1)
    return months
