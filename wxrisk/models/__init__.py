"""Pydantic models for the weather risk engine."""

from .limits import Band, MinimumsResult, MinimumsViolation, PersonalMinimums, Thresholds
from .results import (
    AlertCondition,
    DepartureWindow,
    DepartureWindowResult,
    ForecastPoint,
    ForecastWind,
    SafeWindow,
    SunInfo,
    WeatherChange,
    WeatherTrend,
    WindComponents,
)
from .weather import (
    CloudLayer,
    ForecastPeriod,
    GeoLocation,
    NormalizedObservation,
    Visibility,
    Wind,
    lowest_ceiling,
    parse_visibility_sm,
)

__all__ = [
    "AlertCondition",
    "Band",
    "CloudLayer",
    "DepartureWindow",
    "DepartureWindowResult",
    "ForecastPeriod",
    "ForecastPoint",
    "ForecastWind",
    "GeoLocation",
    "MinimumsResult",
    "MinimumsViolation",
    "NormalizedObservation",
    "PersonalMinimums",
    "SafeWindow",
    "SunInfo",
    "Thresholds",
    "Visibility",
    "WeatherChange",
    "WeatherTrend",
    "Wind",
    "WindComponents",
    "lowest_ceiling",
    "parse_visibility_sm",
]
