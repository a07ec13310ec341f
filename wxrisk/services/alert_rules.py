"""Hazard alert rules.

Each rule takes the same inputs and returns at most one ``AlertCondition``.
Missing inputs (no runway, no gust, no ceiling, variable wind) suppress the
rule; no rule raises.
"""

from __future__ import annotations

from datetime import datetime
import math
from typing import Callable, Optional

from wxrisk.domain import AlertType, FlightCategory, Severity
from wxrisk.models.limits import Thresholds
from wxrisk.models.results import AlertCondition
from wxrisk.models.weather import NormalizedObservation
from wxrisk.services.daylight import get_sun_info
from wxrisk.services.formatting import epoch_millis, format_number

AlertRule = Callable[
    [NormalizedObservation, Thresholds, Optional[float], datetime],
    Optional[AlertCondition],
]


def _alert(
    prefix: str,
    alert_type: AlertType,
    severity: Severity,
    title: str,
    message: str,
    now: datetime,
) -> AlertCondition:
    return AlertCondition(
        id=f"{prefix}-{epoch_millis(now)}",
        type=alert_type,
        severity=severity,
        title=title,
        message=message,
        timestamp=now,
    )


def crosswind_rule(
    metar: NormalizedObservation,
    thresholds: Thresholds,
    runway_heading: Optional[float],
    now: datetime,
) -> Optional[AlertCondition]:
    wind = metar.wind
    if runway_heading is None or wind.is_variable:
        return None

    angle_deg = abs(((wind.direction - runway_heading + 540) % 360) - 180)
    angle_sin = math.sin(math.radians(angle_deg))
    crosswind = wind.speed * angle_sin
    gust_crosswind = wind.gust * angle_sin if wind.gust else crosswind
    max_crosswind = max(crosswind, gust_crosswind)

    if max_crosswind > thresholds.crosswind.red:
        return _alert(
            "crosswind",
            AlertType.CROSSWIND,
            Severity.RED,
            "Crosswind Exceeds Limits",
            f"Crosswind component: {max_crosswind:.0f} kts "
            f"(limit: {format_number(thresholds.crosswind.red)} kts)",
            now,
        )
    if max_crosswind > thresholds.crosswind.amber:
        return _alert(
            "crosswind",
            AlertType.CROSSWIND,
            Severity.AMBER,
            "Crosswind Advisory",
            f"Crosswind component: {max_crosswind:.0f} kts",
            now,
        )
    return None


def temp_dewpoint_rule(
    metar: NormalizedObservation,
    thresholds: Thresholds,
    runway_heading: Optional[float],
    now: datetime,
) -> Optional[AlertCondition]:
    # Smaller spread is worse
    spread = metar.temp_dewpoint_spread
    if spread <= thresholds.temp_dewpoint_spread.red:
        return _alert(
            "tdspread",
            AlertType.TEMP_DEWPOINT,
            Severity.RED,
            "Fog / Visibility Risk",
            f"Temp/dewpoint spread: {spread:.1f}°C, fog likely",
            now,
        )
    if spread <= thresholds.temp_dewpoint_spread.amber:
        return _alert(
            "tdspread",
            AlertType.TEMP_DEWPOINT,
            Severity.AMBER,
            "Narrowing Temp/Dewpoint Spread",
            f"Spread: {spread:.1f}°C, monitor for fog",
            now,
        )
    return None


def gust_rule(
    metar: NormalizedObservation,
    thresholds: Thresholds,
    runway_heading: Optional[float],
    now: datetime,
) -> Optional[AlertCondition]:
    gust = metar.wind.gust
    if not gust:
        return None
    gust_delta = gust - metar.wind.speed
    if gust_delta > thresholds.gust_factor:
        return _alert(
            "gust",
            AlertType.GUST,
            Severity.AMBER,
            "High-Workload Landing",
            f"Gusts {gust} kts ({gust_delta} kts above sustained), "
            "turbulent approach expected",
            now,
        )
    return None


def ceiling_rule(
    metar: NormalizedObservation,
    thresholds: Thresholds,
    runway_heading: Optional[float],
    now: datetime,
) -> Optional[AlertCondition]:
    ceiling = metar.ceiling
    if ceiling is None:
        return None
    if ceiling < thresholds.ceiling.red:
        return _alert(
            "ceiling", AlertType.CEILING, Severity.RED, "Low Ceiling",
            f"Ceiling at {ceiling} ft AGL", now,
        )
    if ceiling < thresholds.ceiling.amber:
        return _alert(
            "ceiling", AlertType.CEILING, Severity.AMBER, "Reduced Ceiling",
            f"Ceiling at {ceiling} ft AGL", now,
        )
    return None


def visibility_rule(
    metar: NormalizedObservation,
    thresholds: Thresholds,
    runway_heading: Optional[float],
    now: datetime,
) -> Optional[AlertCondition]:
    sm = metar.visibility.sm
    if sm < thresholds.visibility.red:
        return _alert(
            "vis", AlertType.VISIBILITY, Severity.RED, "Low Visibility",
            f"Visibility {format_number(sm)} SM", now,
        )
    if sm < thresholds.visibility.amber:
        return _alert(
            "vis", AlertType.VISIBILITY, Severity.AMBER, "Reduced Visibility",
            f"Visibility {format_number(sm)} SM", now,
        )
    return None


def speci_rule(
    metar: NormalizedObservation,
    thresholds: Thresholds,
    runway_heading: Optional[float],
    now: datetime,
) -> Optional[AlertCondition]:
    if not metar.is_speci:
        return None
    return _alert(
        "speci",
        AlertType.SPECI,
        Severity.AMBER,
        "Special Observation",
        "SPECI issued, conditions changed rapidly since last scheduled report",
        now,
    )


def night_vfr_rule(
    metar: NormalizedObservation,
    thresholds: Thresholds,
    runway_heading: Optional[float],
    now: datetime,
) -> Optional[AlertCondition]:
    sun = get_sun_info(metar.location.lat, metar.location.lon, now)
    if not sun.is_night:
        return None

    # Marginal or instrument conditions at night rank above plain night VFR
    severity = Severity.AMBER if metar.flight_category == FlightCategory.VFR else Severity.RED
    return _alert(
        "nightvfr",
        AlertType.NIGHT_VFR,
        severity,
        "Night VFR Operations",
        "Night conditions, increased minimums apply (ceiling >= 1500ft, "
        f"visibility >= 5SM). Sunset {sun.sunset_local}, "
        f"civil twilight ends {sun.civil_twilight_end_local}",
        now,
    )


def low_altimeter_rule(
    metar: NormalizedObservation,
    thresholds: Thresholds,
    runway_heading: Optional[float],
    now: datetime,
) -> Optional[AlertCondition]:
    if metar.altimeter >= thresholds.low_altimeter:
        return None
    return _alert(
        "lowaltim",
        AlertType.LOW_ALTIMETER,
        Severity.AMBER,
        "Low Pressure System",
        f'Altimeter {metar.altimeter:.2f}" low pressure detected. '
        "Expect higher true altitude than indicated.",
        now,
    )


ALL_RULES: tuple[AlertRule, ...] = (
    crosswind_rule,
    temp_dewpoint_rule,
    gust_rule,
    ceiling_rule,
    visibility_rule,
    speci_rule,
    night_vfr_rule,
    low_altimeter_rule,
)


__all__ = [
    "ALL_RULES",
    "AlertRule",
    "ceiling_rule",
    "crosswind_rule",
    "gust_rule",
    "low_altimeter_rule",
    "night_vfr_rule",
    "speci_rule",
    "temp_dewpoint_rule",
    "visibility_rule",
]
