"""Result records returned by the evaluators."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from wxrisk.domain import (
    AlertType,
    ChangeType,
    FlightCategory,
    Severity,
    TrendDirection,
)
from wxrisk.models.weather import CloudLayer


class AlertCondition(BaseModel):
    """A hazard raised by one alert rule."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Rule prefix plus detection timestamp")
    type: AlertType = Field(..., description="Hazard tag")
    severity: Severity = Field(..., description="red, amber or green")
    title: str = Field(..., description="Short headline")
    message: str = Field(..., description="Detail text")
    timestamp: datetime = Field(..., description="Detection time (UTC)")


class SunInfo(BaseModel):
    """Day/night boundaries for one location and date.

    Any instant is ``None`` when the sun does not cross the corresponding
    depression angle that day (polar day or night). Check before use.
    """

    model_config = ConfigDict(frozen=True)

    is_night: bool = Field(..., description="Night predicate at the reference instant")
    sunrise: Optional[datetime] = Field(default=None)
    sunset: Optional[datetime] = Field(default=None)
    civil_twilight_start: Optional[datetime] = Field(
        default=None, description="Morning civil twilight begins",
    )
    civil_twilight_end: Optional[datetime] = Field(
        default=None, description="Evening civil twilight ends",
    )
    currency_night: Optional[datetime] = Field(
        default=None, description="Sunset plus 60 minutes",
    )
    logbook_night: Optional[datetime] = Field(
        default=None, description="Evening civil twilight end",
    )
    sunrise_local: str = Field(default="N/A", description="Formatted as HHMM TZ")
    sunset_local: str = Field(default="N/A")
    civil_twilight_end_local: str = Field(default="N/A")
    currency_night_local: str = Field(default="N/A")
    logbook_night_local: str = Field(default="N/A")


class ForecastWind(BaseModel):
    model_config = ConfigDict(frozen=True)

    direction: Union[int, Literal["VRB"]]
    speed: int
    gust: Optional[int] = None


class ForecastPoint(BaseModel):
    """Expected conditions at one sampled instant."""

    model_config = ConfigDict(frozen=True)

    time: datetime = Field(..., description="Sampled instant (UTC)")
    flight_category: FlightCategory
    ceiling: Optional[int] = Field(default=None, description="Feet AGL, None when clear")
    visibility: float = Field(..., description="Statute miles")
    wind: ForecastWind
    present_weather: Optional[str] = None
    clouds: list[CloudLayer] = Field(default_factory=list)


class DepartureWindow(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime
    category: FlightCategory = Field(..., description="Category when the window opened")
    reason: Optional[str] = Field(
        default=None, description="Why the window closed, when it closed on a failing sample",
    )

    @property
    def duration_minutes(self) -> float:
        return (self.end - self.start).total_seconds() / 60


class DepartureWindowResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    windows: list[DepartureWindow] = Field(default_factory=list)
    currently_meets_minimums: bool = Field(
        ..., description="First sample satisfies the pilot's minimums",
    )
    best_window: Optional[DepartureWindow] = Field(
        default=None, description="Longest window; the earliest wins ties",
    )
    advisory: str = Field(..., description="Narrative summary for the pilot")


class SafeWindow(BaseModel):
    """First forecast period that satisfies the pilot's minimums."""

    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime
    start_zulu: str = Field(..., description="HHMMZ")
    end_zulu: str = Field(..., description="HHMMZ")


class WeatherTrend(BaseModel):
    model_config = ConfigDict(frozen=True)

    metric: str
    direction: TrendDirection
    current_value: str
    forecast_value: str
    description: str


class WeatherChange(BaseModel):
    """A significant difference between a briefing snapshot and a later report."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: ChangeType
    severity: Severity
    title: str
    description: str
    previous_value: str
    current_value: str
    detected_at: datetime


class WindComponents(BaseModel):
    model_config = ConfigDict(frozen=True)

    headwind: int = Field(..., description="Knots; negative is a tailwind")
    crosswind: int = Field(..., description="Knots, absolute value")
    crosswind_side: Literal["left", "right", "none"]


__all__ = [
    "AlertCondition",
    "DepartureWindow",
    "DepartureWindowResult",
    "ForecastPoint",
    "ForecastWind",
    "SafeWindow",
    "SunInfo",
    "WeatherChange",
    "WeatherTrend",
    "WindComponents",
]
