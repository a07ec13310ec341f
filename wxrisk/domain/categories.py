"""Enumerations and classification helpers shared by all evaluators."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class FlightCategory(str, Enum):
    """Coarse ceiling/visibility classification."""

    VFR = "VFR"
    MVFR = "MVFR"
    IFR = "IFR"
    LIFR = "LIFR"


class Severity(str, Enum):
    """Severity tag carried by alerts and change records."""

    RED = "red"
    AMBER = "amber"
    GREEN = "green"


class TrendDirection(str, Enum):
    IMPROVING = "improving"
    DETERIORATING = "deteriorating"
    STABLE = "stable"


class AlertType(str, Enum):
    """Hazard tags produced by the alert rules."""

    CROSSWIND = "crosswind"
    TEMP_DEWPOINT = "temp_dewpoint"
    CEILING = "ceiling"
    VISIBILITY = "visibility"
    GUST = "gust"
    SPECI = "speci"
    NIGHT_VFR = "night_vfr"
    LOW_ALTIMETER = "low_altimeter"


class ChangeType(str, Enum):
    """Dimensions compared by the change detector."""

    CATEGORY = "category"
    WIND = "wind"
    GUST = "gust"
    VISIBILITY = "visibility"
    CEILING = "ceiling"
    WEATHER = "weather"
    SPECI = "speci"


class ForecastChangeType(str, Enum):
    """TAF period change indicator. BASE is the initial (untagged) period."""

    BASE = "BASE"
    FROM = "FM"
    BECOMING = "BECMG"
    TEMPORARY = "TEMPO"
    PROBABILITY = "PROB"


class CloudCover(str, Enum):
    CLEAR = "CLR"
    SKY_CLEAR = "SKC"
    FEW = "FEW"
    SCATTERED = "SCT"
    BROKEN = "BKN"
    OVERCAST = "OVC"


CEILING_COVERS = frozenset({CloudCover.BROKEN, CloudCover.OVERCAST})

# Higher rank = better conditions
_CATEGORY_RANKS = {
    FlightCategory.LIFR: 1,
    FlightCategory.IFR: 2,
    FlightCategory.MVFR: 3,
    FlightCategory.VFR: 4,
}

_SEVERITY_ORDER = {Severity.RED: 0, Severity.AMBER: 1, Severity.GREEN: 2}


def flight_category(ceiling: Optional[int], visibility: float) -> FlightCategory:
    """Classify ceiling (ft AGL, ``None`` when clear) and visibility (SM).

    Thresholds are checked worst-first and the first match wins. A missing
    ceiling never lowers the category on its own.
    """

    if (ceiling is not None and ceiling < 500) or visibility < 1:
        return FlightCategory.LIFR
    if (ceiling is not None and ceiling < 1000) or visibility < 3:
        return FlightCategory.IFR
    if (ceiling is not None and ceiling < 3000) or visibility < 5:
        return FlightCategory.MVFR
    return FlightCategory.VFR


def category_rank(category: FlightCategory) -> int:
    return _CATEGORY_RANKS.get(category, 0)


def severity_rank(severity: Severity) -> int:
    """Sort key placing red before amber before green."""

    return _SEVERITY_ORDER[severity]


__all__ = [
    "AlertType",
    "CEILING_COVERS",
    "ChangeType",
    "CloudCover",
    "FlightCategory",
    "ForecastChangeType",
    "Severity",
    "TrendDirection",
    "category_rank",
    "flight_category",
    "severity_rank",
]
