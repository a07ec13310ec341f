"""Simplified NOAA solar position math.

Computes sunrise, sunset and civil twilight instants from the Julian day,
solar declination and equation of time. When the sun never reaches a given
depression angle on a date (polar day or night) the matching instant is
``None``; it is never clamped to a real time.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
import logging
import math
from typing import Optional

from wxrisk.services.formatting import as_utc

logger = logging.getLogger("wxrisk.solar")

DEG_TO_RAD = math.pi / 180
RAD_TO_DEG = 180 / math.pi

# Sun center altitude at the visible horizon, including refraction
SUNRISE_ALTITUDE_DEG = -0.833
CIVIL_TWILIGHT_ALTITUDE_DEG = -6.0

OBLIQUITY_DEG = 23.44
J2000 = 2451545.0


@dataclass(frozen=True)
class SunTimes:
    """Raw crossing instants for one solar day (UTC)."""

    sunrise: Optional[datetime]
    sunset: Optional[datetime]
    civil_twilight_start: Optional[datetime]
    civil_twilight_end: Optional[datetime]
    declination: float

    @property
    def is_polar(self) -> bool:
        return None in (
            self.sunrise,
            self.sunset,
            self.civil_twilight_start,
            self.civil_twilight_end,
        )


def _clamp_unit(value: float) -> float:
    return max(-1.0, min(1.0, value))


def julian_day(moment: datetime) -> float:
    """Julian day number (fractional) for a UTC instant."""

    moment = as_utc(moment)
    y = moment.year
    m = moment.month
    d = (
        moment.day
        + moment.hour / 24
        + moment.minute / 1440
        + moment.second / 86400
    )

    a = (14 - m) // 12
    y_adj = y + 4800 - a
    m_adj = m + 12 * a - 3

    return (
        d
        + (153 * m_adj + 2) // 5
        + 365 * y_adj
        + y_adj // 4
        - y_adj // 100
        + y_adj // 400
        - 32045.5
    )


def _mean_longitude_and_anomaly(jd: float) -> tuple[float, float]:
    n = jd - J2000
    mean_longitude = (280.46 + 0.9856474 * n) % 360
    mean_anomaly = (357.528 + 0.9856003 * n) % 360
    return mean_longitude, mean_anomaly


def solar_declination(jd: float) -> float:
    """Solar declination in radians."""

    mean_longitude, mean_anomaly = _mean_longitude_and_anomaly(jd)
    g = mean_anomaly * DEG_TO_RAD
    ecliptic_longitude = (
        mean_longitude + 1.915 * math.sin(g) + 0.02 * math.sin(2 * g)
    ) * DEG_TO_RAD
    return math.asin(
        _clamp_unit(math.sin(OBLIQUITY_DEG * DEG_TO_RAD) * math.sin(ecliptic_longitude))
    )


def equation_of_time(jd: float) -> float:
    """Equation of time in minutes."""

    mean_longitude, mean_anomaly = _mean_longitude_and_anomaly(jd)
    l_rad = mean_longitude * DEG_TO_RAD
    g = mean_anomaly * DEG_TO_RAD
    return (
        -1.915 * math.sin(g)
        - 0.02 * math.sin(2 * g)
        + 2.466 * math.sin(2 * l_rad)
        - 0.053 * math.sin(4 * l_rad)
    )


def hour_angle(lat: float, declination: float, altitude_deg: float) -> Optional[float]:
    """Hour angle (degrees) at which the sun's center reaches ``altitude_deg``.

    Returns ``None`` when the sun stays above that altitude all day
    (cos < -1) or never climbs to it (cos > 1).
    """

    lat_rad = lat * DEG_TO_RAD
    denominator = math.cos(lat_rad) * math.cos(declination)
    if denominator == 0:
        return None
    cos_h = (
        math.sin(altitude_deg * DEG_TO_RAD) - math.sin(lat_rad) * math.sin(declination)
    ) / denominator

    if cos_h > 1 or cos_h < -1:
        return None
    return math.acos(cos_h) * RAD_TO_DEG


def noon_elevation(lat: float, declination: float) -> float:
    """Sun elevation in degrees at local solar noon."""

    return 90.0 - abs(lat - declination * RAD_TO_DEG)


def solar_day_start(lon: float, moment: datetime) -> datetime:
    """UTC midnight of the calendar date in local mean solar time.

    Anchoring on the solar date keeps an evening instant west of Greenwich
    (already past 00Z) paired with that evening's sunset.
    """

    local_solar = as_utc(moment) + timedelta(minutes=4 * lon)
    return local_solar.replace(hour=0, minute=0, second=0, microsecond=0)


def time_from_hour_angle(
    day_start: datetime,
    lon: float,
    ha: Optional[float],
    eot: float,
    rising: bool,
) -> Optional[datetime]:
    if ha is None:
        return None
    noon = 720 - 4 * lon - eot  # minutes after 00Z
    offset = -ha * 4 if rising else ha * 4
    minutes = math.floor(noon + offset + 0.5)
    return day_start + timedelta(minutes=minutes)


def get_sun_times(lat: float, lon: float, moment: datetime) -> SunTimes:
    """Sunrise, sunset and civil twilight for the solar day containing ``moment``."""

    jd = julian_day(moment)
    decl = solar_declination(jd)
    eot = equation_of_time(jd)

    ha_sunrise = hour_angle(lat, decl, SUNRISE_ALTITUDE_DEG)
    ha_civil = hour_angle(lat, decl, CIVIL_TWILIGHT_ALTITUDE_DEG)

    day_start = solar_day_start(lon, moment)
    times = SunTimes(
        sunrise=time_from_hour_angle(day_start, lon, ha_sunrise, eot, True),
        sunset=time_from_hour_angle(day_start, lon, ha_sunrise, eot, False),
        civil_twilight_start=time_from_hour_angle(day_start, lon, ha_civil, eot, True),
        civil_twilight_end=time_from_hour_angle(day_start, lon, ha_civil, eot, False),
        declination=decl,
    )
    if times.is_polar:
        logger.debug(
            "Polar conditions at lat=%.2f on %s; some crossings undefined",
            lat,
            day_start.date(),
        )
    return times


__all__ = [
    "CIVIL_TWILIGHT_ALTITUDE_DEG",
    "SUNRISE_ALTITUDE_DEG",
    "SunTimes",
    "equation_of_time",
    "get_sun_times",
    "hour_angle",
    "julian_day",
    "noon_elevation",
    "solar_declination",
    "solar_day_start",
]
