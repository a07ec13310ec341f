"""Current-versus-forecast trend indicators."""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Optional, Sequence

from wxrisk.domain import TrendDirection, category_rank
from wxrisk.models.results import WeatherTrend
from wxrisk.models.weather import ForecastPeriod, NormalizedObservation
from wxrisk.services.formatting import as_utc, format_number
from wxrisk.services.forecast_timeline import generate_forecast_timeline

logger = logging.getLogger("wxrisk.trends")

CEILING_TREND_THRESHOLD_FT = 500
VISIBILITY_TREND_THRESHOLD_SM = 1
WIND_TREND_THRESHOLD_KT = 3

# Timeline index compared against the current observation (about 2-3 hours out)
COMPARISON_INDEX = 2


def trend_direction(diff: float, threshold: float) -> TrendDirection:
    """Positive change beyond ``threshold`` is improving."""

    if diff > threshold:
        return TrendDirection.IMPROVING
    if diff < -threshold:
        return TrendDirection.DETERIORATING
    return TrendDirection.STABLE


def describe_change(
    metric: str,
    current: float,
    future: float,
    unit: str,
    direction: TrendDirection,
) -> str:
    if direction == TrendDirection.STABLE:
        return f"{metric} expected to remain around {format_number(current)} {unit}"
    verb = "improving" if direction == TrendDirection.IMPROVING else "dropping"
    return f"{metric} {verb} from {format_number(current)} to {format_number(future)} {unit}"


def _ceiling_trend(current: Optional[int], future: Optional[int]) -> Optional[WeatherTrend]:
    if current is not None and future is not None:
        direction = trend_direction(future - current, CEILING_TREND_THRESHOLD_FT)
        return WeatherTrend(
            metric="Ceiling",
            direction=direction,
            current_value=f"{current} ft",
            forecast_value=f"{future} ft",
            description=describe_change("Ceiling", current, future, "ft", direction),
        )
    if current is not None:
        return WeatherTrend(
            metric="Ceiling",
            direction=TrendDirection.IMPROVING,
            current_value=f"{current} ft",
            forecast_value="Clear",
            description="Ceiling expected to clear",
        )
    if future is not None:
        return WeatherTrend(
            metric="Ceiling",
            direction=TrendDirection.DETERIORATING,
            current_value="Clear",
            forecast_value=f"{future} ft",
            description=f"Ceiling expected to develop at {future} ft",
        )
    return None


def analyze_weather_trends(
    observation: NormalizedObservation,
    periods: Sequence[ForecastPeriod],
    *,
    now: Optional[datetime] = None,
) -> list[WeatherTrend]:
    """Per-metric direction between now and the 2-3 hour forecast point."""

    timeline = generate_forecast_timeline(periods, now=as_utc(now))
    if len(timeline) < 2:
        return []

    future = timeline[COMPARISON_INDEX] if len(timeline) > COMPARISON_INDEX else timeline[1]
    trends: list[WeatherTrend] = []

    ceiling_trend = _ceiling_trend(observation.ceiling, future.ceiling)
    if ceiling_trend is not None:
        trends.append(ceiling_trend)

    current_vis = observation.visibility.sm
    vis_direction = trend_direction(future.visibility - current_vis, VISIBILITY_TREND_THRESHOLD_SM)
    trends.append(
        WeatherTrend(
            metric="Visibility",
            direction=vis_direction,
            current_value=f"{format_number(current_vis)} SM",
            forecast_value=f"{format_number(future.visibility)} SM",
            description=describe_change(
                "Visibility", current_vis, future.visibility, "SM", vis_direction
            ),
        )
    )

    # Rising wind is the deteriorating direction
    current_wind = observation.wind.speed
    future_wind = future.wind.speed
    wind_diff = future_wind - current_wind
    if wind_diff > WIND_TREND_THRESHOLD_KT:
        wind_direction = TrendDirection.DETERIORATING
        wind_text = f"Wind increasing from {current_wind} to {future_wind} kts"
    elif wind_diff < -WIND_TREND_THRESHOLD_KT:
        wind_direction = TrendDirection.IMPROVING
        wind_text = f"Wind decreasing from {current_wind} to {future_wind} kts"
    else:
        wind_direction = TrendDirection.STABLE
        wind_text = "Wind speed expected to remain steady"
    trends.append(
        WeatherTrend(
            metric="Wind",
            direction=wind_direction,
            current_value=f"{current_wind} kts",
            forecast_value=f"{future_wind} kts",
            description=wind_text,
        )
    )

    current_cat = observation.flight_category
    future_cat = future.flight_category
    if current_cat != future_cat:
        improving = category_rank(future_cat) > category_rank(current_cat)
        trends.append(
            WeatherTrend(
                metric="Flight Category",
                direction=TrendDirection.IMPROVING if improving else TrendDirection.DETERIORATING,
                current_value=current_cat.value,
                forecast_value=future_cat.value,
                description=(
                    f"Conditions expected to change from {current_cat.value} "
                    f"to {future_cat.value}"
                ),
            )
        )

    logger.debug("%s trends: %d metrics reported", observation.station, len(trends))
    return trends


__all__ = ["analyze_weather_trends", "describe_change", "trend_direction"]
