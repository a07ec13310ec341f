"""Evaluators for the weather risk engine."""

from .alert_engine import evaluate_alerts
from .alert_rules import ALL_RULES, AlertRule
from .change_detector import detect_weather_changes
from .daylight import get_sun_info, is_night
from .departure_window import calculate_departure_windows, find_safe_window
from .forecast_timeline import generate_forecast_timeline
from .minimums import evaluate_minimums, night_minimums
from .solar import SunTimes, get_sun_times
from .trends import analyze_weather_trends
from .wind import crosswind_component, wind_components

__all__ = [
    "ALL_RULES",
    "AlertRule",
    "SunTimes",
    "analyze_weather_trends",
    "calculate_departure_windows",
    "crosswind_component",
    "detect_weather_changes",
    "evaluate_alerts",
    "evaluate_minimums",
    "find_safe_window",
    "generate_forecast_timeline",
    "get_sun_info",
    "get_sun_times",
    "is_night",
    "night_minimums",
    "wind_components",
]
