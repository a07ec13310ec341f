"""Weather change detection between a briefing snapshot and a later report.

Severity levels:

* amber: noteworthy change, the pilot should review
* red: critical change, flight safety may be compromised
"""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Optional

from wxrisk.domain import (
    ChangeType,
    FlightCategory,
    Severity,
    category_rank,
    severity_rank,
)
from wxrisk.models.results import WeatherChange
from wxrisk.models.weather import NormalizedObservation
from wxrisk.services.formatting import as_utc, epoch_millis, format_number

logger = logging.getLogger("wxrisk.change_detector")

HAZARDOUS_TOKENS = ("TS", "FZ", "FG", "+RA", "+SN", "GR", "FC", "VA")
CRITICAL_CATEGORIES = frozenset({FlightCategory.IFR, FlightCategory.LIFR})

WIND_RED_DELTA_KT = 15
WIND_AMBER_DELTA_KT = 5
GUST_RED_KT = 10
VISIBILITY_RED_SM = 3
VISIBILITY_AMBER_DROP_SM = 2
CEILING_RED_FT = 1000
CEILING_AMBER_DROP_FT = 500


def hazard_tokens(weather: Optional[str]) -> list[str]:
    if not weather:
        return []
    upper = weather.upper()
    return [token for token in HAZARDOUS_TOKENS if token in upper]


class _ChangeLog:
    """Collects changes that share one detection timestamp."""

    def __init__(self, now: datetime) -> None:
        self.now = now
        self.changes: list[WeatherChange] = []

    def add(
        self,
        prefix: str,
        change_type: ChangeType,
        severity: Severity,
        title: str,
        description: str,
        previous_value: str,
        current_value: str,
    ) -> None:
        self.changes.append(
            WeatherChange(
                id=f"{prefix}-{epoch_millis(self.now)}",
                type=change_type,
                severity=severity,
                title=title,
                description=description,
                previous_value=previous_value,
                current_value=current_value,
                detected_at=self.now,
            )
        )


def _check_category(
    log: _ChangeLog, snapshot: NormalizedObservation, current: NormalizedObservation
) -> None:
    prev_cat = snapshot.flight_category
    curr_cat = current.flight_category
    if prev_cat == curr_cat:
        return

    degraded = category_rank(curr_cat) < category_rank(prev_cat)
    verb = "degraded" if degraded else "improved"
    log.add(
        "cat",
        ChangeType.CATEGORY,
        Severity.RED if degraded and curr_cat in CRITICAL_CATEGORIES else Severity.AMBER,
        "Flight Category Changed",
        f"Conditions {verb} from {prev_cat.value} to {curr_cat.value}",
        prev_cat.value,
        curr_cat.value,
    )


def _check_wind(
    log: _ChangeLog, snapshot: NormalizedObservation, current: NormalizedObservation
) -> None:
    delta = current.wind.speed - snapshot.wind.speed
    magnitude = abs(delta)
    if magnitude > WIND_RED_DELTA_KT:
        severity, title = Severity.RED, "Significant Wind Change"
    elif magnitude > WIND_AMBER_DELTA_KT:
        severity, title = Severity.AMBER, "Wind Speed Change"
    else:
        return

    log.add(
        "wind",
        ChangeType.WIND,
        severity,
        title,
        f"Wind {'increased' if delta > 0 else 'decreased'} by {magnitude} kts",
        f"{snapshot.wind.speed} kts",
        f"{current.wind.speed} kts",
    )


def _check_gust(
    log: _ChangeLog, snapshot: NormalizedObservation, current: NormalizedObservation
) -> None:
    prev_gust = snapshot.wind.gust or 0
    curr_gust = current.wind.gust or 0

    if curr_gust > 0 and prev_gust == 0:
        log.add(
            "gust",
            ChangeType.GUST,
            Severity.RED if curr_gust >= GUST_RED_KT else Severity.AMBER,
            "Gusts Detected",
            f"Gusting to {curr_gust} kts (no gusts at briefing time)",
            "No gusts",
            f"G{curr_gust} kts",
        )
    elif prev_gust > 0 and curr_gust > prev_gust:
        increase = curr_gust - prev_gust
        log.add(
            "gust",
            ChangeType.GUST,
            Severity.RED if increase >= GUST_RED_KT else Severity.AMBER,
            "Gusts Increasing",
            f"Gusts increased by {increase} kts",
            f"G{prev_gust} kts",
            f"G{curr_gust} kts",
        )


def _check_visibility(
    log: _ChangeLog, snapshot: NormalizedObservation, current: NormalizedObservation
) -> None:
    prev_sm = snapshot.visibility.sm
    curr_sm = current.visibility.sm
    drop = prev_sm - curr_sm
    if drop <= 0:
        return

    if curr_sm < VISIBILITY_RED_SM:
        log.add(
            "vis",
            ChangeType.VISIBILITY,
            Severity.RED,
            "Visibility Below 3 SM",
            f"Visibility dropped to {format_number(curr_sm)} SM (was {format_number(prev_sm)} SM)",
            f"{format_number(prev_sm)} SM",
            f"{format_number(curr_sm)} SM",
        )
    elif drop > VISIBILITY_AMBER_DROP_SM:
        log.add(
            "vis",
            ChangeType.VISIBILITY,
            Severity.AMBER,
            "Visibility Decreasing",
            f"Visibility dropped {drop:.1f} SM",
            f"{format_number(prev_sm)} SM",
            f"{format_number(curr_sm)} SM",
        )


def _check_ceiling(
    log: _ChangeLog, snapshot: NormalizedObservation, current: NormalizedObservation
) -> None:
    prev_ceiling = snapshot.ceiling
    curr_ceiling = current.ceiling
    if curr_ceiling is None:
        return

    if prev_ceiling is None:
        low = curr_ceiling < CEILING_RED_FT
        log.add(
            "ceil",
            ChangeType.CEILING,
            Severity.RED if low else Severity.AMBER,
            "Low Ceiling Developing" if low else "Ceiling Developing",
            f"Ceiling appeared at {curr_ceiling} ft AGL (previously clear)",
            "Clear",
            f"{curr_ceiling} ft AGL",
        )
        return

    drop = prev_ceiling - curr_ceiling
    if drop <= 0:
        return
    if curr_ceiling < CEILING_RED_FT:
        log.add(
            "ceil",
            ChangeType.CEILING,
            Severity.RED,
            "Ceiling Below 1000 ft",
            f"Ceiling dropped to {curr_ceiling} ft AGL (was {prev_ceiling} ft AGL)",
            f"{prev_ceiling} ft AGL",
            f"{curr_ceiling} ft AGL",
        )
    elif drop > CEILING_AMBER_DROP_FT:
        log.add(
            "ceil",
            ChangeType.CEILING,
            Severity.AMBER,
            "Ceiling Lowering",
            f"Ceiling dropped {drop} ft",
            f"{prev_ceiling} ft AGL",
            f"{curr_ceiling} ft AGL",
        )


def _check_weather(
    log: _ChangeLog, snapshot: NormalizedObservation, current: NormalizedObservation
) -> None:
    prev_wx = snapshot.present_weather
    curr_wx = current.present_weather
    prev_hazards = hazard_tokens(prev_wx)
    new_hazards = [token for token in hazard_tokens(curr_wx) if token not in prev_hazards]

    if new_hazards:
        log.add(
            "wx",
            ChangeType.WEATHER,
            Severity.RED,
            "Hazardous Weather Reported",
            f"New weather phenomena: {', '.join(new_hazards)}",
            prev_wx or "None",
            curr_wx or "None",
        )
    elif curr_wx and not prev_wx and not hazard_tokens(curr_wx):
        log.add(
            "wx",
            ChangeType.WEATHER,
            Severity.AMBER,
            "Weather Phenomena Reported",
            f"New weather: {curr_wx}",
            "None",
            curr_wx,
        )


def _check_speci(
    log: _ChangeLog, snapshot: NormalizedObservation, current: NormalizedObservation
) -> None:
    if current.is_speci and not snapshot.is_speci:
        log.add(
            "speci",
            ChangeType.SPECI,
            Severity.AMBER,
            "SPECI Observation Issued",
            "A special (unscheduled) observation was issued, indicating "
            "significant weather change at the station",
            "METAR",
            "SPECI",
        )


_CHECKS = (
    _check_category,
    _check_wind,
    _check_gust,
    _check_visibility,
    _check_ceiling,
    _check_weather,
    _check_speci,
)


def detect_weather_changes(
    snapshot: NormalizedObservation,
    current: NormalizedObservation,
    *,
    now: Optional[datetime] = None,
) -> list[WeatherChange]:
    """Significant changes since ``snapshot``, red first, otherwise in check order."""

    log = _ChangeLog(as_utc(now))
    for check in _CHECKS:
        check(log, snapshot, current)

    changes = sorted(log.changes, key=lambda change: severity_rank(change.severity))
    if changes:
        logger.debug(
            "%s: %d changes since snapshot (%s)",
            current.station,
            len(changes),
            ", ".join(f"{c.type.value}:{c.severity.value}" for c in changes),
        )
    return changes


__all__ = ["HAZARDOUS_TOKENS", "detect_weather_changes", "hazard_tokens"]
