"""Departure windows derived from the forecast and the pilot's minimums.

Two lookups share the same pass/fail policy:

* ``find_safe_window`` returns the first sustained TAF period that meets
  the minimums outright.
* ``calculate_departure_windows`` samples the hourly timeline every 30
  minutes, merges consecutive passing samples into windows and writes a
  short advisory for the pilot.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
import logging
from typing import Optional, Sequence

from wxrisk.config import settings
from wxrisk.domain import FlightCategory
from wxrisk.models.limits import PersonalMinimums
from wxrisk.models.results import (
    DepartureWindow,
    DepartureWindowResult,
    ForecastPoint,
    SafeWindow,
)
from wxrisk.models.weather import ForecastPeriod
from wxrisk.services.formatting import as_utc, format_clock, format_number, format_zulu
from wxrisk.services.forecast_timeline import generate_forecast_timeline

logger = logging.getLogger("wxrisk.departure_window")

INSUFFICIENT_DATA_ADVISORY = "Insufficient forecast data to calculate departure windows."


@dataclass(frozen=True)
class SamplePoint:
    time: datetime
    meets_minimums: bool
    category: FlightCategory
    reason: Optional[str] = None


def find_safe_window(
    periods: Sequence[ForecastPeriod], minimums: PersonalMinimums
) -> Optional[SafeWindow]:
    """First non-TEMPO/PROB period whose ceiling, visibility, wind and gust all pass."""

    for period in periods:
        if period.is_transient:
            continue

        ceiling = period.ceiling
        gust = period.wind.gust or 0

        ceiling_ok = ceiling is None or ceiling >= minimums.ceiling
        visibility_ok = period.visibility_sm >= minimums.visibility
        wind_ok = period.wind.speed <= minimums.max_wind
        gust_ok = gust <= minimums.max_gust

        if ceiling_ok and visibility_ok and wind_ok and gust_ok:
            return SafeWindow(
                start=period.time_from,
                end=period.time_to,
                start_zulu=format_zulu(period.time_from),
                end_zulu=format_zulu(period.time_to),
            )
    return None


def check_minimums(
    point: ForecastPoint, minimums: PersonalMinimums
) -> tuple[bool, Optional[str]]:
    """Pass/fail for one forecast point with the first failing reason."""

    if point.ceiling is not None and point.ceiling < minimums.ceiling:
        return False, (
            f"Ceiling {point.ceiling} ft below {format_number(minimums.ceiling)} ft minimum"
        )
    if point.visibility < minimums.visibility:
        return False, (
            f"Visibility {format_number(point.visibility)} SM below "
            f"{format_number(minimums.visibility)} SM minimum"
        )
    if point.wind.speed > minimums.max_wind:
        return False, (
            f"Wind {point.wind.speed} kts exceeds {format_number(minimums.max_wind)} kts limit"
        )
    if point.wind.gust and point.wind.gust > minimums.max_gust:
        return False, (
            f"Gusts {point.wind.gust} kts exceed {format_number(minimums.max_gust)} kts limit"
        )
    return True, None


def find_closest_point(
    timeline: Sequence[ForecastPoint], target: datetime
) -> Optional[ForecastPoint]:
    """Nearest timeline point; the earlier point wins a tie."""

    if not timeline:
        return None
    return min(timeline, key=lambda point: abs((point.time - target).total_seconds()))


def extract_windows(samples: Sequence[SamplePoint]) -> list[DepartureWindow]:
    """Merge consecutive passing samples into windows.

    A window closes at the first failing sample after it, carrying that
    sample's reason, or at the final sample if still open. Zero-length
    windows (a pass only at the last sample) are dropped.
    """

    windows: list[DepartureWindow] = []
    window_start: Optional[datetime] = None
    window_category = FlightCategory.VFR

    for sample in samples:
        if sample.meets_minimums and window_start is None:
            window_start = sample.time
            window_category = sample.category
        elif not sample.meets_minimums and window_start is not None:
            if window_start < sample.time:
                windows.append(
                    DepartureWindow(
                        start=window_start,
                        end=sample.time,
                        category=window_category,
                        reason=sample.reason,
                    )
                )
            window_start = None

    if window_start is not None and samples and window_start < samples[-1].time:
        windows.append(
            DepartureWindow(
                start=window_start,
                end=samples[-1].time,
                category=window_category,
            )
        )
    return windows


def _round_tenth(value: float) -> float:
    return round(value * 10) / 10


def generate_advisory(
    windows: Sequence[DepartureWindow],
    currently_meets: bool,
    samples: Sequence[SamplePoint],
    now: datetime,
    tz: tzinfo,
    horizon_hours: int,
) -> str:
    if not windows:
        reasons = Counter(s.reason for s in samples if not s.meets_minimums and s.reason)
        top_reason = reasons.most_common(1)[0][0] if reasons else None
        return (
            f"No VFR windows forecast in the next {horizon_hours} hours. "
            f"{top_reason or 'Conditions below personal minimums'}."
        )

    if currently_meets and len(windows) == 1:
        window = windows[0]
        hours_remaining = _round_tenth((window.end - now).total_seconds() / 3600)
        if hours_remaining >= horizon_hours - 0.5:
            return f"VFR conditions expected to persist for the next {horizon_hours}+ hours."

        advisory = (
            f"VFR window until {format_clock(window.end, tz)} local. "
            "Conditions expected to deteriorate after that."
        )
        if window.reason:
            advisory = f"{advisory} {window.reason}."
        return advisory

    if not currently_meets:
        window = windows[0]
        wait_minutes = round((window.start - now).total_seconds() / 60)
        start_local = format_clock(window.start, tz)
        end_local = format_clock(window.end, tz)

        if wait_minutes <= 0:
            return f"VFR window available now until {end_local} local."

        duration_hours = _round_tenth(window.duration_minutes / 60)
        wait_text = (
            f"{wait_minutes} minutes"
            if wait_minutes < 60
            else f"{format_number(_round_tenth(wait_minutes / 60))} hours"
        )
        return (
            f"Currently below minimums. Next VFR window: {start_local}-{end_local} local "
            f"({format_number(duration_hours)} hrs). "
            f"Delay departure {wait_text} for favorable conditions."
        )

    ranges = ", ".join(
        f"{format_clock(w.start, tz)}-{format_clock(w.end, tz)}" for w in windows
    )
    return f"{len(windows)} VFR windows in next {horizon_hours} hours: {ranges}."


def calculate_departure_windows(
    periods: Sequence[ForecastPeriod],
    minimums: PersonalMinimums,
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
    horizon_hours: Optional[int] = None,
    sample_minutes: Optional[int] = None,
) -> DepartureWindowResult:
    """Contiguous windows over the next ``horizon_hours`` where minimums are met."""

    start = as_utc(now)
    zone = tz or settings.local_tz()
    hours = settings.timeline_horizon_hours if horizon_hours is None else horizon_hours
    step = settings.window_sample_minutes if sample_minutes is None else sample_minutes
    if step <= 0:
        logger.warning("Non-positive sample interval %r; sampling every minute", step)
        step = 1

    timeline = generate_forecast_timeline(periods, now=start, horizon_hours=hours)
    if not timeline:
        logger.debug("No forecast points; departure windows unavailable")
        return DepartureWindowResult(
            windows=[],
            currently_meets_minimums=False,
            advisory=INSUFFICIENT_DATA_ADVISORY,
        )

    samples: list[SamplePoint] = []
    for index in range(hours * 60 // step + 1):
        sample_time = start + timedelta(minutes=index * step)
        closest = find_closest_point(timeline, sample_time)
        if closest is None:
            continue
        meets, reason = check_minimums(closest, minimums)
        samples.append(
            SamplePoint(
                time=sample_time,
                meets_minimums=meets,
                category=closest.flight_category,
                reason=reason,
            )
        )

    windows = extract_windows(samples)
    currently_meets = bool(samples) and samples[0].meets_minimums
    best_window = max(windows, key=lambda w: w.duration_minutes) if windows else None
    advisory = generate_advisory(windows, currently_meets, samples, start, zone, hours)

    logger.debug(
        "Departure windows: %d found from %d samples, currently_meets=%s",
        len(windows),
        len(samples),
        currently_meets,
    )
    return DepartureWindowResult(
        windows=windows,
        currently_meets_minimums=currently_meets,
        best_window=best_window,
        advisory=advisory,
    )


__all__ = [
    "INSUFFICIENT_DATA_ADVISORY",
    "SamplePoint",
    "calculate_departure_windows",
    "check_minimums",
    "extract_windows",
    "find_closest_point",
    "find_safe_window",
    "generate_advisory",
]
