# runlog/utils/pace_table.py
"""
Tabla estática VDOT → ritmos de entrenamiento (min/km, "mm:ss").

Aproximación simplificada de las tablas publicadas de Daniels (VDOT 30–85).
Se carga una vez al importar y no tiene ruta de mutación: las entradas son
inmutables y los ritmos van envueltos en MappingProxyType.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

PACE_TYPES = ("easy", "marathon", "threshold", "interval", "repetition")


@dataclass(frozen=True)
class PaceTableEntry:
    vdot: int
    paces: Mapping[str, str]


def _paces(easy, marathon, threshold, interval, repetition) -> Mapping[str, str]:
    return MappingProxyType({
        "easy": easy,
        "marathon": marathon,
        "threshold": threshold,
        "interval": interval,
        "repetition": repetition,
    })


# Ordenada por vdot ascendente
PACE_TABLE = (
    PaceTableEntry(30, _paces("07:27", "06:44", "06:19", "05:51", "05:27")),
    PaceTableEntry(31, _paces("07:18", "06:36", "06:12", "05:44", "05:21")),
    PaceTableEntry(32, _paces("07:09", "06:28", "06:04", "05:37", "05:14")),
    PaceTableEntry(33, _paces("07:01", "06:21", "05:57", "05:31", "05:08")),
    PaceTableEntry(34, _paces("06:53", "06:14", "05:50", "05:24", "05:02")),
    PaceTableEntry(35, _paces("06:45", "06:07", "05:44", "05:18", "04:56")),
    PaceTableEntry(36, _paces("06:38", "06:00", "05:37", "05:12", "04:51")),
    PaceTableEntry(37, _paces("06:30", "05:54", "05:31", "05:07", "04:46")),
    PaceTableEntry(38, _paces("06:23", "05:47", "05:25", "05:01", "04:40")),
    PaceTableEntry(39, _paces("06:17", "05:41", "05:20", "04:56", "04:35")),
    PaceTableEntry(40, _paces("06:10", "05:35", "05:14", "04:51", "04:30")),
    PaceTableEntry(41, _paces("06:04", "05:30", "05:09", "04:46", "04:26")),
    PaceTableEntry(42, _paces("05:58", "05:24", "05:04", "04:41", "04:21")),
    PaceTableEntry(43, _paces("05:52", "05:19", "04:59", "04:37", "04:17")),
    PaceTableEntry(44, _paces("05:46", "05:14", "04:54", "04:32", "04:13")),
    PaceTableEntry(45, _paces("05:41", "05:09", "04:49", "04:28", "04:09")),
    PaceTableEntry(46, _paces("05:36", "05:04", "04:45", "04:24", "04:05")),
    PaceTableEntry(47, _paces("05:30", "05:00", "04:41", "04:20", "04:01")),
    PaceTableEntry(48, _paces("05:26", "04:55", "04:37", "04:16", "03:57")),
    PaceTableEntry(49, _paces("05:21", "04:51", "04:33", "04:12", "03:54")),
    PaceTableEntry(50, _paces("05:16", "04:47", "04:29", "04:08", "03:50")),
    PaceTableEntry(51, _paces("05:12", "04:43", "04:25", "04:05", "03:47")),
    PaceTableEntry(52, _paces("05:07", "04:39", "04:21", "04:01", "03:44")),
    PaceTableEntry(53, _paces("05:03", "04:35", "04:18", "03:58", "03:41")),
    PaceTableEntry(54, _paces("04:59", "04:31", "04:14", "03:55", "03:38")),
    PaceTableEntry(55, _paces("04:55", "04:28", "04:11", "03:52", "03:35")),
    PaceTableEntry(56, _paces("04:51", "04:24", "04:08", "03:49", "03:32")),
    PaceTableEntry(57, _paces("04:47", "04:21", "04:05", "03:46", "03:30")),
    PaceTableEntry(58, _paces("04:44", "04:18", "04:02", "03:43", "03:27")),
    PaceTableEntry(59, _paces("04:40", "04:15", "03:59", "03:40", "03:25")),
    PaceTableEntry(60, _paces("04:37", "04:12", "03:56", "03:38", "03:22")),
    PaceTableEntry(61, _paces("04:34", "04:09", "03:53", "03:35", "03:20")),
    PaceTableEntry(62, _paces("04:30", "04:06", "03:51", "03:33", "03:18")),
    PaceTableEntry(63, _paces("04:27", "04:03", "03:48", "03:30", "03:15")),
    PaceTableEntry(64, _paces("04:24", "04:01", "03:46", "03:28", "03:13")),
    PaceTableEntry(65, _paces("04:21", "03:58", "03:43", "03:26", "03:11")),
    PaceTableEntry(66, _paces("04:18", "03:55", "03:41", "03:24", "03:09")),
    PaceTableEntry(67, _paces("04:16", "03:53", "03:39", "03:21", "03:07")),
    PaceTableEntry(68, _paces("04:13", "03:51", "03:36", "03:19", "03:05")),
    PaceTableEntry(69, _paces("04:10", "03:48", "03:34", "03:17", "03:03")),
    PaceTableEntry(70, _paces("04:08", "03:46", "03:32", "03:15", "03:01")),
    PaceTableEntry(71, _paces("04:05", "03:44", "03:30", "03:13", "02:59")),
    PaceTableEntry(72, _paces("04:03", "03:42", "03:28", "03:11", "02:58")),
    PaceTableEntry(73, _paces("04:01", "03:40", "03:26", "03:10", "02:56")),
    PaceTableEntry(74, _paces("03:58", "03:38", "03:24", "03:08", "02:54")),
    PaceTableEntry(75, _paces("03:56", "03:36", "03:22", "03:06", "02:53")),
    PaceTableEntry(76, _paces("03:54", "03:34", "03:20", "03:04", "02:51")),
    PaceTableEntry(77, _paces("03:52", "03:32", "03:18", "03:03", "02:50")),
    PaceTableEntry(78, _paces("03:50", "03:30", "03:16", "03:01", "02:48")),
    PaceTableEntry(79, _paces("03:48", "03:28", "03:15", "02:59", "02:47")),
    PaceTableEntry(80, _paces("03:46", "03:26", "03:13", "02:58", "02:45")),
    PaceTableEntry(81, _paces("03:44", "03:25", "03:11", "02:56", "02:44")),
    PaceTableEntry(82, _paces("03:42", "03:23", "03:10", "02:55", "02:42")),
    PaceTableEntry(83, _paces("03:40", "03:21", "03:08", "02:53", "02:41")),
    PaceTableEntry(84, _paces("03:38", "03:20", "03:07", "02:52", "02:40")),
    PaceTableEntry(85, _paces("03:37", "03:18", "03:05", "02:50", "02:38")),
)

VDOT_MIN = PACE_TABLE[0].vdot
VDOT_MAX = PACE_TABLE[-1].vdot
