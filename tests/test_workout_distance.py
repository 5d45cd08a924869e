# tests/test_workout_distance.py

import logging
from types import SimpleNamespace

import pytest
from runlog.services import workout_distance as wd


def test_un_bloque_por_distancia():
    work = [{"type": "distance", "distance": {"value": 5}, "repetitions": 1}]
    assert wd.total_distance(None, work, None) == pytest.approx(5)


def test_bloque_por_tiempo_y_ritmo_con_repeticiones():
    # 1200 s / 240 s/km = 5 km por repetición
    work = [{"type": "time", "time": "20:00", "pace": {"pace": "04:00"}, "repetitions": 2}]
    assert wd.total_distance(None, work, None) == pytest.approx(10)


def test_calentamiento_y_vuelta_a_la_calma_con_ritmo():
    warm_up = {"time": "10:00", "pace": {"type": "easy", "pace": "05:00"}}   # 2 km
    cool_down = {"distance": {"value": 1500, "unit": "m"}}                   # 1.5 km
    work = [{"type": "distance", "distance": {"value": 1, "unit": "mi"}, "repetitions": 3}]
    total = wd.total_distance(warm_up, work, cool_down)
    assert total == pytest.approx(2 + 3 * 1.609344 + 1.5)


def test_distancia_explicita_gana_al_ritmo():
    effort = {"distance": {"value": 3, "unit": "km"}, "time": "30:00", "pace": "05:00"}
    assert isinstance(wd.parse_effort(effort), wd.DistanceEffort)
    assert wd.effort_distance(wd.parse_effort(effort)) == pytest.approx(3)


def test_variantes_de_esfuerzo():
    assert wd.parse_effort(None) is wd.UNSPECIFIED
    assert wd.parse_effort({}) is wd.UNSPECIFIED
    assert wd.parse_effort({"distance": 4}) == wd.DistanceEffort(4.0, "km")
    assert wd.parse_effort({"time": "12:00", "pace": "04:00"}) == wd.PaceTimedEffort("12:00", "04:00")


def test_esfuerzo_sin_datos_cuenta_cero_y_avisa(caplog):
    with caplog.at_level(logging.WARNING, logger="runlog.services.workout_distance"):
        total = wd.total_distance(None, [{"type": "time", "time": "20:00"}], None)
    assert total == 0
    assert "counted as 0" in caplog.text


def test_repeticiones_por_defecto():
    seg = wd.parse_work_segment({"distance": {"value": 2}})
    assert seg.repetitions == 1
    seg = wd.parse_work_segment({"distance": {"value": 2}, "repetitions": None})
    assert seg.repetitions == 1


def test_distancia_es_aditiva():
    a = [{"distance": {"value": 2}}, {"time": "08:00", "pace": "04:00", "repetitions": 3}]
    b = [{"distance": {"value": 400, "unit": "m"}, "repetitions": 5}]
    warm_up = {"distance": {"value": 1}}
    total = wd.total_distance(warm_up, a + b, None)
    assert total == pytest.approx(
        wd.total_distance(warm_up, a, None) + wd.total_distance(None, b, None)
    )


def test_unidad_desconocida():
    with pytest.raises(ValueError):
        wd.effort_distance(wd.DistanceEffort(1, "yd"))


def test_total_desde_objeto():
    workout = SimpleNamespace(
        warm_up={"distance": {"value": 2}},
        work=[{"distance": {"value": 1000, "unit": "m"}, "repetitions": 6}],
        cool_down={"distance": {"value": 2}},
    )
    assert wd.workout_total_distance(workout) == pytest.approx(10)
