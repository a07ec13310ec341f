from datetime import datetime, timedelta, timezone

import pytest

from wxrisk.services.daylight import get_sun_info, is_night
from wxrisk.services.solar import get_sun_times, julian_day, solar_day_start

UTC = timezone.utc

KJFK = (40.6413, -73.7781)
KMIA = (25.7959, -80.2870)
KLAX = (33.9416, -118.4085)


def test_julian_day_at_j2000_epoch():
    assert julian_day(datetime(2000, 1, 1, 12, 0, tzinfo=UTC)) == pytest.approx(2451545.0)


def test_solar_day_start_uses_local_mean_date():
    # 00:30Z on the 16th is still the afternoon of the 15th in Los Angeles
    start = solar_day_start(KLAX[1], datetime(2024, 3, 16, 0, 30, tzinfo=UTC))

    assert start == datetime(2024, 3, 15, tzinfo=UTC)


@pytest.mark.parametrize("lat,lon", [(0.0, 0.0), KMIA, KJFK, (47.45, -122.31)])
@pytest.mark.parametrize(
    "day",
    [
        datetime(2024, 3, 20, 12, tzinfo=UTC),
        datetime(2024, 6, 21, 12, tzinfo=UTC),
        datetime(2024, 9, 22, 12, tzinfo=UTC),
        datetime(2024, 12, 21, 12, tzinfo=UTC),
    ],
)
def test_twilight_ordering(lat, lon, day):
    info = get_sun_info(lat, lon, day, tz=UTC)

    assert info.civil_twilight_start < info.sunrise < info.sunset
    assert info.sunset < info.civil_twilight_end < info.currency_night


@pytest.mark.parametrize(
    "lat,lon,day",
    [
        (*KJFK, datetime(2024, 3, 15, 17, tzinfo=UTC)),
        (*KMIA, datetime(2024, 7, 4, 17, tzinfo=UTC)),
        (70.0, 25.0, datetime(2024, 12, 21, 12, tzinfo=UTC)),
    ],
)
def test_currency_night_is_exactly_one_hour_after_sunset(lat, lon, day):
    info = get_sun_info(lat, lon, day, tz=UTC)

    if info.sunset is None:
        assert info.currency_night is None
    else:
        assert info.currency_night - info.sunset == timedelta(minutes=60)


def test_logbook_night_matches_civil_twilight_end():
    info = get_sun_info(*KJFK, datetime(2024, 3, 15, 17, tzinfo=UTC), tz=UTC)

    assert info.logbook_night == info.civil_twilight_end
    assert info.logbook_night_local == info.civil_twilight_end_local


def test_kjfk_sunset_falls_on_the_expected_utc_evening():
    times = get_sun_times(*KJFK, datetime(2024, 3, 15, 17, tzinfo=UTC))

    assert times.sunset.date() == datetime(2024, 3, 15).date()
    assert 22 <= times.sunset.hour <= 23


@pytest.mark.parametrize(
    "lat,lon,low,high",
    [
        (*KJFK, 24, 28),
        (*KMIA, 21, 25),
    ],
)
def test_evening_civil_twilight_duration(lat, lon, low, high):
    times = get_sun_times(lat, lon, datetime(2024, 3, 15, 17, tzinfo=UTC))
    minutes = (times.civil_twilight_end - times.sunset).total_seconds() / 60

    assert low <= minutes <= high


def test_polar_night_has_no_sunrise_or_sunset():
    info = get_sun_info(70.0, 25.0, datetime(2024, 12, 21, 12, tzinfo=UTC), tz=UTC)

    assert info.sunrise is None
    assert info.sunset is None
    assert info.currency_night is None
    assert info.sunrise_local == "N/A"
    assert info.sunset_local == "N/A"
    assert info.currency_night_local == "N/A"
    # The sun still climbs above -6 degrees around noon
    assert info.civil_twilight_start is not None
    assert info.civil_twilight_end is not None


def test_midnight_sun_has_no_sunset_or_twilight():
    times = get_sun_times(70.0, 25.0, datetime(2024, 6, 21, 12, tzinfo=UTC))

    assert times.is_polar
    assert times.sunrise is None
    assert times.sunset is None
    assert times.civil_twilight_end is None


def test_is_night_at_kjfk():
    assert not is_night(*KJFK, datetime(2024, 3, 15, 17, tzinfo=UTC))
    assert is_night(*KJFK, datetime(2024, 3, 15, 4, tzinfo=UTC))


def test_civil_twilight_window_counts_as_day():
    times = get_sun_times(*KJFK, datetime(2024, 3, 15, 17, tzinfo=UTC))
    end = times.civil_twilight_end

    assert not is_night(*KJFK, times.sunset + timedelta(minutes=5))
    assert not is_night(*KJFK, end - timedelta(minutes=1))
    assert is_night(*KJFK, end)


def test_west_coast_evening_after_00z_is_not_night():
    assert not is_night(*KLAX, datetime(2024, 3, 16, 0, 30, tzinfo=UTC))
    assert is_night(*KLAX, datetime(2024, 3, 16, 3, 30, tzinfo=UTC))


def test_is_night_polar_fallbacks():
    # Midnight sun at 70N: continuous daylight
    assert not is_night(70.0, 25.0, datetime(2024, 6, 21, 23, tzinfo=UTC))
    # Deep polar night at 80N: the sun never reaches -6 degrees
    assert is_night(80.0, 15.0, datetime(2024, 12, 21, 11, tzinfo=UTC))


def test_naive_datetimes_are_treated_as_utc():
    aware = get_sun_info(*KJFK, datetime(2024, 3, 15, 17, tzinfo=UTC), tz=UTC)
    naive = get_sun_info(*KJFK, datetime(2024, 3, 15, 17), tz=UTC)

    assert aware == naive


def test_local_strings_use_zone_abbreviation():
    info = get_sun_info(*KJFK, datetime(2024, 3, 15, 17, tzinfo=UTC), tz=UTC)

    assert info.sunset_local.endswith(" UTC")
    assert len(info.sunset_local.split()[0]) == 4
