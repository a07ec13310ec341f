"""Hourly forecast timeline sampled from TAF periods."""

from __future__ import annotations

from datetime import datetime, timedelta
import logging
from typing import Optional, Sequence

from wxrisk.config import settings
from wxrisk.domain import flight_category
from wxrisk.models.results import ForecastPoint, ForecastWind
from wxrisk.models.weather import ForecastPeriod
from wxrisk.services.formatting import as_utc

logger = logging.getLogger("wxrisk.forecast_timeline")


def find_applicable_period(
    periods: Sequence[ForecastPeriod], target: datetime
) -> Optional[ForecastPeriod]:
    """Pick the sustained (base/FM) period in force at ``target``.

    The latest-starting period containing the instant wins. Otherwise the
    first period that has not ended yet, otherwise the first period.
    TEMPO/PROB/BECMG groups are never selected.
    """

    target = as_utc(target)
    sustained = [p for p in periods if p.is_sustained]

    for period in reversed(sustained):
        if as_utc(period.time_from) <= target < as_utc(period.time_to):
            return period

    for period in sustained:
        if target < as_utc(period.time_to):
            return period

    return sustained[0] if sustained else None


def point_from_period(period: ForecastPeriod, time: datetime) -> ForecastPoint:
    ceiling = period.ceiling
    visibility = period.visibility_sm
    return ForecastPoint(
        time=time,
        flight_category=flight_category(ceiling, visibility),
        ceiling=ceiling,
        visibility=visibility,
        wind=ForecastWind(
            direction=period.wind.direction,
            speed=period.wind.speed,
            gust=period.wind.gust,
        ),
        present_weather=period.present_weather,
        clouds=list(period.clouds),
    )


def generate_forecast_timeline(
    periods: Sequence[ForecastPeriod],
    *,
    now: Optional[datetime] = None,
    horizon_hours: Optional[int] = None,
) -> list[ForecastPoint]:
    """One point per hour from ``now`` through ``now + horizon_hours`` inclusive."""

    start = as_utc(now)
    hours = settings.timeline_horizon_hours if horizon_hours is None else horizon_hours

    points: list[ForecastPoint] = []
    for offset in range(hours + 1):
        target = start + timedelta(hours=offset)
        period = find_applicable_period(periods, target)
        if period is None:
            continue
        points.append(point_from_period(period, target))

    logger.debug("Forecast timeline built: %d points from %d periods", len(points), len(periods))
    return points


__all__ = ["find_applicable_period", "generate_forecast_timeline", "point_from_period"]
