# tests/test_vdot.py

import pytest
from dataclasses import FrozenInstanceError

from runlog.utils import vdot as v
from runlog.utils.pace_table import PACE_TABLE, PACE_TYPES, VDOT_MAX, VDOT_MIN


# ---- calculate_vdot ----
def test_vdot_5k_en_20_minutos():
    # 47.4645 / 0.92 = 51.59 -> 52
    assert v.calculate_vdot(5, 1200) == 52


def test_vdot_es_determinista():
    results = {v.calculate_vdot(10, 2400) for _ in range(20)}
    assert results == {53}


@pytest.mark.parametrize(
    "distance_km, seconds, expected",
    [
        (5, 1500, 40),          # 5K en 25:00
        (10, 2400, 53),         # 10K en 40:00
        (21.0975, 5400, 51),    # media en 1:30:00
        (42.195, 10800, 55),    # maratón en 3:00:00 (t=180 -> 0.80)
        (1.5, 240, 80),         # 1500 en 4:00
    ],
)
def test_vdot_marcas_conocidas(distance_km, seconds, expected):
    assert v.calculate_vdot(distance_km, seconds) == expected


def test_vdot_mas_rapido_es_mayor():
    assert v.calculate_vdot(5, 1100) > v.calculate_vdot(5, 1200) > v.calculate_vdot(5, 1300)


@pytest.mark.parametrize(
    "minutes, expected",
    [
        (3, 0.98),
        (3.5, 0.98),
        (5, 0.97),
        (7, 0.95),
        (20, 0.92),
        (30, 0.90),
        (60, 0.8765),
        (120, 0.83),
        (150, 0.8015),
        (200, 0.799),
    ],
)
def test_percent_vo2max_por_tramos(minutes, expected):
    assert v.percent_vo2max(minutes) == pytest.approx(expected)


def test_percent_vo2max_nunca_supera_083_en_esfuerzos_largos():
    for minutes in (120.5, 121, 150, 240):
        assert v.percent_vo2max(minutes) <= 0.83
    assert v.percent_vo2max(125) == pytest.approx(0.80275)


def test_redondeo_como_math_round():
    assert v._round_half_up(52.5) == 53
    assert v._round_half_up(51.5) == 52
    assert v._round_half_up(51.49) == 51


# ---- ritmos ----
def test_ritmos_entrada_exacta():
    entry = next(e for e in PACE_TABLE if e.vdot == 50)
    assert v.get_training_paces(50) == dict(entry.paces)
    assert v.get_training_paces(50) == {
        "easy": "05:16",
        "marathon": "04:47",
        "threshold": "04:29",
        "interval": "04:08",
        "repetition": "03:50",
    }


def test_ritmos_valor_cercano():
    assert v.get_training_paces(51.4) == v.get_training_paces(51)
    assert v.get_training_paces(51.6) == v.get_training_paces(52)


def test_ritmos_empate_gana_la_primera_entrada():
    assert v.get_training_paces(30.5) == v.get_training_paces(30)
    assert v.get_training_paces(50.5) == v.get_training_paces(50)


def test_ritmos_fuera_de_rango_devuelve_extremos():
    assert v.get_training_paces(10) == dict(PACE_TABLE[0].paces)
    assert v.get_training_paces(120) == dict(PACE_TABLE[-1].paces)


def test_ritmos_devuelve_copia():
    paces = v.get_training_paces(50)
    paces["easy"] = "99:99"
    assert v.get_training_paces(50)["easy"] == "05:16"


# ---- tabla ----
def test_tabla_ordenada_y_completa():
    vdots = [e.vdot for e in PACE_TABLE]
    assert vdots == list(range(VDOT_MIN, VDOT_MAX + 1))
    assert (VDOT_MIN, VDOT_MAX) == (30, 85)
    for e in PACE_TABLE:
        assert tuple(e.paces) == PACE_TYPES
        assert all(v.PACE_RE.match(p) for p in e.paces.values())


def test_tabla_ritmos_mas_rapidos_con_vdot_mayor():
    for lo, hi in zip(PACE_TABLE, PACE_TABLE[1:]):
        for kind in PACE_TYPES:
            assert v.pace_to_seconds(hi.paces[kind]) <= v.pace_to_seconds(lo.paces[kind])


def test_tabla_inmutable():
    entry = PACE_TABLE[0]
    with pytest.raises(FrozenInstanceError):
        entry.vdot = 99
    with pytest.raises(TypeError):
        entry.paces["easy"] = "00:01"


# ---- tiempos estimados ----
def test_predicciones_vdot_50():
    times = v.get_predicted_race_times(50)
    assert list(times) == list(v.RACE_DISTANCES_KM)
    assert times["800m"] == "3:07"
    assert times["5K"] == "20:20"
    assert times["10K"] == "41:46"
    assert times["Half Marathon"] == "1:30:34"
    assert times["Marathon"] == "3:08:10"


def test_predicciones_mejoran_con_vdot():
    slow = v.get_predicted_race_times(40)
    fast = v.get_predicted_race_times(60)
    for label in v.RACE_DISTANCES_KM:
        assert _secs(fast[label]) < _secs(slow[label])


def _secs(text):
    total = 0
    for part in text.split(":"):
        total = total * 60 + int(part)
    return total


@pytest.mark.parametrize(
    "seconds, expected",
    [(59, "0:59"), (1220, "20:20"), (3599, "59:59"), (3600, "1:00:00"), (11290, "3:08:10")],
)
def test_format_race_time(seconds, expected):
    assert v.format_race_time(seconds) == expected


# ---- conversiones ----
@pytest.mark.parametrize("seconds", [0, 1, 59, 60, 240, 330, 3599, 5999])
def test_pace_ida_y_vuelta(seconds):
    assert v.pace_to_seconds(v.seconds_to_pace(seconds)) == seconds


def test_pace_formato():
    assert v.seconds_to_pace(240) == "04:00"
    assert v.seconds_to_pace(65) == "01:05"
    assert v.seconds_to_pace(6000) == "100:00"
    assert v.pace_to_seconds("05:30") == 330


@pytest.mark.parametrize("bad", ["", "5", "4:60", "ab:cd", "04:5", "-1:00", None])
def test_pace_mal_formado(bad):
    with pytest.raises(ValueError):
        v.pace_to_seconds(bad)


def test_tiempo_carrera():
    assert v.time_to_seconds("01:30:00") == 5400
    assert v.time_to_seconds("0:19:45") == 1185
    assert v.seconds_to_time(5400) == "01:30:00"
    assert v.seconds_to_time(1185) == "00:19:45"
    with pytest.raises(ValueError):
        v.time_to_seconds("90:00")
    with pytest.raises(ValueError):
        v.time_to_seconds("01:61:00")
