"""Day/night boundaries for night currency, logbook night and night VFR."""

from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
import logging
from typing import Optional

from wxrisk.config import settings
from wxrisk.models.results import SunInfo
from wxrisk.services.formatting import as_utc, format_hhmm_tz
from wxrisk.services.solar import (
    CIVIL_TWILIGHT_ALTITUDE_DEG,
    SunTimes,
    get_sun_times,
    noon_elevation,
)

logger = logging.getLogger("wxrisk.daylight")

# Landings count toward 90-day night passenger currency from one hour after sunset
CURRENCY_NIGHT_OFFSET = timedelta(minutes=60)


def currency_night(sunset: Optional[datetime]) -> Optional[datetime]:
    if sunset is None:
        return None
    return sunset + CURRENCY_NIGHT_OFFSET


def _is_night_from_times(lat: float, times: SunTimes, moment: datetime) -> bool:
    start = times.civil_twilight_start
    end = times.civil_twilight_end
    if start is None or end is None:
        # No civil twilight crossing today: continuously dark or continuously light
        dark = noon_elevation(lat, times.declination) < CIVIL_TWILIGHT_ALTITUDE_DEG
        logger.debug(
            "Civil twilight undefined at lat=%.2f; continuous %s",
            lat,
            "night" if dark else "day",
        )
        return dark
    return moment < start or moment >= end


def is_night(lat: float, lon: float, at: Optional[datetime] = None) -> bool:
    """True before morning civil twilight or from evening civil twilight end onward.

    The civil twilight window itself counts as day.
    """

    moment = as_utc(at)
    return _is_night_from_times(lat, get_sun_times(lat, lon, moment), moment)


def get_sun_info(
    lat: float,
    lon: float,
    at: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> SunInfo:
    """Sun times plus currency and logbook night for the day containing ``at``.

    Formatted strings use ``tz`` (default: the configured local zone).
    Instants the sun does not reach that day are ``None`` and format as
    ``N/A``.
    """

    moment = as_utc(at)
    zone = tz or settings.local_tz()
    times = get_sun_times(lat, lon, moment)
    currency = currency_night(times.sunset)

    return SunInfo(
        is_night=_is_night_from_times(lat, times, moment),
        sunrise=times.sunrise,
        sunset=times.sunset,
        civil_twilight_start=times.civil_twilight_start,
        civil_twilight_end=times.civil_twilight_end,
        currency_night=currency,
        logbook_night=times.civil_twilight_end,
        sunrise_local=format_hhmm_tz(times.sunrise, zone),
        sunset_local=format_hhmm_tz(times.sunset, zone),
        civil_twilight_end_local=format_hhmm_tz(times.civil_twilight_end, zone),
        currency_night_local=format_hhmm_tz(currency, zone),
        logbook_night_local=format_hhmm_tz(times.civil_twilight_end, zone),
    )


__all__ = ["CURRENCY_NIGHT_OFFSET", "currency_night", "get_sun_info", "is_night"]
