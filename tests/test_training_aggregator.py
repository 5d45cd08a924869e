# tests/test_training_aggregator.py

from datetime import date, datetime
from types import SimpleNamespace

import pytest
from runlog.errors import DuplicateDayError, WorkoutNotFoundError
from runlog.services import training_aggregator as agg


def entry(day, workout_id=1, completed=False, actual_distance=None, workout=None):
    return SimpleNamespace(
        day=day, workout_id=workout_id, workout=workout,
        completed=completed, completed_at=None, actual_distance=actual_distance, notes=None,
    )


def plan(d, entries, total=0.0, completed=0.0):
    return SimpleNamespace(date=d, entries=entries, total_distance=total, completed_distance=completed)


WORKOUTS = {
    1: SimpleNamespace(id=1, total_distance=5.0),
    2: SimpleNamespace(id=2, total_distance=10.0),
}


# ---- total del plan ----
def test_total_suma_los_workouts():
    entries = [entry("Monday", 1), entry("Tuesday", 2)]
    assert agg.recompute_plan_total(entries, WORKOUTS.get) == pytest.approx(15)


def test_total_dia_duplicado():
    entries = [entry("Monday", 1), entry("Monday", 2)]
    with pytest.raises(DuplicateDayError) as exc:
        agg.recompute_plan_total(entries, WORKOUTS.get)
    assert exc.value.message == "Duplicate day Monday in plan"
    assert exc.value.status_code == 400


def test_total_workout_inexistente():
    entries = [entry("Monday", 1), entry("Friday", 99)]
    with pytest.raises(WorkoutNotFoundError) as exc:
        agg.recompute_plan_total(entries, WORKOUTS.get)
    assert "99" in exc.value.message
    assert exc.value.status_code == 404


# ---- distancia completada ----
def test_completar_suma_las_entradas_completadas():
    done = entry("Monday", 1, completed=True, actual_distance=5)
    pending = entry("Wednesday", 2)
    p = plan(date(2024, 5, 13), [done, pending], total=15, completed=5)

    now = datetime(2024, 5, 15, 19, 30)
    agg.complete_entry(p, pending, actual_distance=10, notes="buenas sensaciones", now=now)

    assert p.completed_distance == pytest.approx(15)
    assert pending.completed is True
    assert pending.completed_at == now
    assert pending.notes == "buenas sensaciones"


def test_completar_sin_distancia_cuenta_cero():
    e = entry("Monday", 1)
    p = plan(date(2024, 5, 13), [e])
    agg.complete_entry(p, e, now=datetime(2024, 5, 13, 8, 0))
    assert e.completed and e.actual_distance is None
    assert p.completed_distance == 0


def test_recalculo_completado_idempotente():
    entries = [
        entry("Monday", completed=True, actual_distance=4.5),
        entry("Tuesday", completed=False, actual_distance=8),
        entry("Thursday", completed=True),
    ]
    first = agg.recompute_completed_distance(entries)
    assert first == pytest.approx(4.5)
    assert agg.recompute_completed_distance(entries) == first


def test_completar_corrige_un_valor_corrupto():
    e = entry("Monday", completed=True, actual_distance=6)
    other = entry("Tuesday")
    p = plan(date(2024, 5, 13), [e, other], completed=999)
    agg.complete_entry(p, other, actual_distance=4, now=datetime(2024, 5, 14))
    assert p.completed_distance == pytest.approx(10)


# ---- resumen semanal ----
def test_resumen_solo_cuenta_la_semana_actual():
    today = date(2024, 5, 16)   # jueves; semana 13..19 de mayo
    inside = plan(
        date(2024, 5, 13),
        [entry("Monday", 1, completed=True, actual_distance=5), entry("Wednesday", 2)],
        total=15, completed=5,
    )
    sunday = plan(date(2024, 5, 19), [entry("Sunday", 2)], total=10)
    outside = plan(date(2024, 5, 20), [entry("Monday", 1, completed=True)], total=5, completed=5)

    s = agg.weekly_summary([inside, sunday, outside], today)

    assert s["week_start"] == "2024-05-13"
    assert s["week_end"] == "2024-05-19"
    assert s["total_planned_distance"] == pytest.approx(25)
    assert s["total_completed_distance"] == pytest.approx(5)
    assert s["workouts_planned"] == 3
    assert s["workouts_completed"] == 1
    assert list(s["days"]) == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
    assert len(s["days"]["Monday"]["planned"]) == 1
    assert len(s["days"]["Monday"]["completed"]) == 1
    assert len(s["days"]["Wednesday"]["completed"]) == 0
    assert len(s["days"]["Sunday"]["planned"]) == 1


def test_resumen_dia_desconocido_cuenta_pero_no_se_agrupa():
    p = plan(date(2024, 5, 14), [entry("Funday", completed=True), entry("Tuesday")], total=3)
    s = agg.weekly_summary([p], date(2024, 5, 14))
    assert s["workouts_planned"] == 2
    assert s["workouts_completed"] == 1
    assert sum(len(d["planned"]) for d in s["days"].values()) == 1


def test_resumen_con_render():
    p = plan(date(2024, 5, 14), [entry("Tuesday", 7)])
    s = agg.weekly_summary([p], date(2024, 5, 14), render=lambda e: e.workout_id)
    assert s["days"]["Tuesday"]["planned"] == [7]


def test_resumen_acepta_datetime():
    p = plan(datetime(2024, 5, 14, 6, 0), [entry("Tuesday")], total=8)
    s = agg.weekly_summary([p], date(2024, 5, 18))
    assert s["total_planned_distance"] == pytest.approx(8)


# ---- agrupación ISO ----
def test_agrupa_por_semana_iso_en_orden():
    w = WORKOUTS[1]
    plans = [
        plan(date(2021, 1, 4), [entry("Monday", workout=w)], total=5),
        plan(date(2021, 1, 3), [entry("Sunday", workout=w, completed=True)], total=5, completed=5),
        plan(date(2020, 12, 28), [entry("Monday", workout=w)], total=10),
    ]
    weeks = agg.group_by_iso_week(plans)

    assert [(b["year"], b["week"]) for b in weeks] == [(2020, 53), (2021, 1)]
    assert weeks[0]["planned_distance"] == pytest.approx(15)
    assert weeks[0]["completed_distance"] == pytest.approx(5)
    assert len(weeks[0]["workouts"]) == 2
    assert weeks[1]["workouts"] == [{"day": "Monday", "completed": False, "workout": w}]


def test_no_mezcla_la_misma_semana_de_anios_distintos():
    plans = [
        plan(date(2023, 1, 9), [], total=1),    # 2023-W02
        plan(date(2024, 1, 8), [], total=2),    # 2024-W02
    ]
    weeks = agg.group_by_iso_week(plans)
    assert [(b["year"], b["week"]) for b in weeks] == [(2023, 2), (2024, 2)]
