"""Normalized weather observation and forecast models consumed by the evaluators."""

from __future__ import annotations

from datetime import datetime
import math
from typing import Iterable, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field

from wxrisk.domain import (
    CEILING_COVERS,
    CloudCover,
    FlightCategory,
    ForecastChangeType,
    flight_category,
)

DEFAULT_VISIBILITY_SM = 10.0

SUSTAINED_CHANGE_TYPES = frozenset({ForecastChangeType.BASE, ForecastChangeType.FROM})
TRANSIENT_CHANGE_TYPES = frozenset(
    {ForecastChangeType.TEMPORARY, ForecastChangeType.PROBABILITY}
)


def parse_visibility_sm(raw: Union[str, float, int, None]) -> float:
    """Parse a reported visibility into statute miles.

    Accepts plain numbers and the usual report spellings ("10+", "P6SM",
    "1 1/2", "M1/4SM"). Missing or unparseable values read as 10 SM.
    """

    if raw is None:
        return DEFAULT_VISIBILITY_SM
    if isinstance(raw, (int, float)):
        value = float(raw)
        return value if math.isfinite(value) else DEFAULT_VISIBILITY_SM

    text = raw.strip().upper().replace("SM", "").rstrip("+").lstrip("PM")
    if not text:
        return DEFAULT_VISIBILITY_SM

    total = 0.0
    try:
        for part in text.split():
            if "/" in part:
                num, den = part.split("/", 1)
                total += float(num) / float(den)
            else:
                total += float(part)
    except (ValueError, ZeroDivisionError):
        return DEFAULT_VISIBILITY_SM
    # float() accepts "nan" and "inf"
    if not math.isfinite(total):
        return DEFAULT_VISIBILITY_SM
    return total


def lowest_ceiling(clouds: Iterable["CloudLayer"]) -> Optional[int]:
    """Return the base of the lowest broken or overcast layer, if any."""

    bases = [
        layer.base
        for layer in clouds
        if layer.cover in CEILING_COVERS and layer.base is not None and layer.base >= 0
    ]
    return min(bases) if bases else None


class CloudLayer(BaseModel):
    """One reported cloud layer."""

    model_config = ConfigDict(frozen=True)

    cover: CloudCover = Field(..., description="Sky cover code")
    base: Optional[int] = Field(
        default=None, description="Layer base in feet AGL; absent for CLR/SKC",
    )


class Wind(BaseModel):
    """Surface wind group."""

    model_config = ConfigDict(frozen=True)

    direction: Union[int, Literal["VRB"]] = Field(
        ..., description="Direction the wind blows from (degrees true) or VRB",
    )
    speed: int = Field(..., ge=0, description="Sustained speed in knots")
    gust: Optional[int] = Field(default=None, description="Gust speed in knots")

    @property
    def is_variable(self) -> bool:
        return self.direction == "VRB"

    @property
    def is_gusty(self) -> bool:
        """True when gusts exceed the sustained speed by more than 10 kt."""

        return self.gust is not None and self.gust > self.speed + 10


class Visibility(BaseModel):
    model_config = ConfigDict(frozen=True)

    sm: float = Field(..., ge=0, description="Prevailing visibility in statute miles")
    is_plus: bool = Field(
        default=False, description="Reported as greater-than (e.g. 10+ or P6SM)",
    )


class GeoLocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90, description="Latitude in decimal degrees")
    lon: float = Field(..., ge=-180, le=180, description="Longitude in decimal degrees")
    elevation: float = Field(default=0.0, description="Station elevation in meters")


class NormalizedObservation(BaseModel):
    """A parsed METAR/SPECI ready for rule evaluation.

    Ceiling, flight category and temperature/dewpoint spread are derived from
    the reported values and cannot be supplied directly.
    """

    model_config = ConfigDict(frozen=True)

    station: str = Field(..., description="ICAO station identifier")
    observation_time: datetime = Field(..., description="Observation time (UTC)")
    is_speci: bool = Field(default=False, description="Special (unscheduled) report")
    temperature_c: float = Field(..., description="Air temperature in Celsius")
    dewpoint_c: float = Field(..., description="Dewpoint in Celsius")
    wind: Wind = Field(..., description="Surface wind")
    visibility: Visibility = Field(..., description="Prevailing visibility")
    altimeter: float = Field(..., description="Altimeter setting in inches of mercury")
    clouds: list[CloudLayer] = Field(default_factory=list, description="Cloud layers")
    present_weather: Optional[str] = Field(
        default=None, description="Present weather string, e.g. '-RA BR'",
    )
    raw_text: str = Field(default="", description="Raw report text")
    location: GeoLocation = Field(..., description="Station position")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def temp_dewpoint_spread(self) -> float:
        return round(self.temperature_c - self.dewpoint_c, 1)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ceiling(self) -> Optional[int]:
        return lowest_ceiling(self.clouds)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def flight_category(self) -> FlightCategory:
        return flight_category(self.ceiling, self.visibility.sm)


class ForecastPeriod(BaseModel):
    """One TAF change group with validity window [time_from, time_to)."""

    model_config = ConfigDict(frozen=True)

    time_from: datetime = Field(..., description="Start of validity (inclusive)")
    time_to: datetime = Field(..., description="End of validity (exclusive)")
    change_type: ForecastChangeType = Field(
        default=ForecastChangeType.BASE, description="TAF change indicator",
    )
    wind: Wind = Field(..., description="Forecast wind")
    visibility: Union[str, float, None] = Field(
        default=None, description="Visibility as reported, e.g. '6+', 'P6SM', 3",
    )
    clouds: list[CloudLayer] = Field(default_factory=list, description="Cloud layers")
    present_weather: Optional[str] = Field(
        default=None, description="Forecast weather string",
    )

    @property
    def is_sustained(self) -> bool:
        """Base and FM periods describe sustained state; TEMPO/PROB/BECMG do not."""

        return self.change_type in SUSTAINED_CHANGE_TYPES

    @property
    def is_transient(self) -> bool:
        return self.change_type in TRANSIENT_CHANGE_TYPES

    @computed_field  # type: ignore[prop-decorator]
    @property
    def visibility_sm(self) -> float:
        return parse_visibility_sm(self.visibility)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def ceiling(self) -> Optional[int]:
        return lowest_ceiling(self.clouds)


__all__ = [
    "CloudLayer",
    "DEFAULT_VISIBILITY_SM",
    "ForecastPeriod",
    "GeoLocation",
    "NormalizedObservation",
    "Visibility",
    "Wind",
    "lowest_ceiling",
    "parse_visibility_sm",
]
