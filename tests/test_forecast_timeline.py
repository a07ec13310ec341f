from datetime import datetime, timedelta, timezone

from factories import layer, make_period
from wxrisk.config import settings
from wxrisk.domain import FlightCategory, ForecastChangeType
from wxrisk.services.forecast_timeline import (
    find_applicable_period,
    generate_forecast_timeline,
)

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


def test_no_periods_yields_empty_timeline():
    assert generate_forecast_timeline([], now=NOW) == []


def test_single_period_gives_seven_identical_hourly_points():
    timeline = generate_forecast_timeline([make_period(NOW - timedelta(hours=6), 24)], now=NOW)

    assert len(timeline) == 7
    assert [p.time for p in timeline] == [NOW + timedelta(hours=i) for i in range(7)]
    first = timeline[0].model_dump(exclude={"time"})
    assert all(p.model_dump(exclude={"time"}) == first for p in timeline)
    assert timeline[0].flight_category == FlightCategory.VFR
    assert timeline[0].visibility == 6.0


def test_tempo_and_prob_groups_are_ignored():
    periods = [
        make_period(NOW - timedelta(hours=1), 12),
        make_period(
            NOW + timedelta(hours=1),
            3,
            change_type=ForecastChangeType.TEMPORARY,
            clouds=[layer("OVC", 400)],
            visibility="1/2",
        ),
        make_period(
            NOW + timedelta(hours=2),
            3,
            change_type=ForecastChangeType.PROBABILITY,
            clouds=[layer("OVC", 600)],
        ),
    ]

    timeline = generate_forecast_timeline(periods, now=NOW)

    assert {p.flight_category for p in timeline} == {FlightCategory.VFR}


def test_only_transient_periods_yield_nothing():
    periods = [make_period(NOW, 6, change_type=ForecastChangeType.TEMPORARY)]

    assert generate_forecast_timeline(periods, now=NOW) == []


def test_from_group_takes_over_at_its_start():
    periods = [
        make_period(NOW - timedelta(hours=1), 12),
        make_period(
            NOW + timedelta(hours=3),
            8,
            change_type=ForecastChangeType.FROM,
            clouds=[layer("BKN", 900)],
        ),
    ]

    timeline = generate_forecast_timeline(periods, now=NOW)

    assert [p.flight_category for p in timeline] == [FlightCategory.VFR] * 3 + [
        FlightCategory.IFR
    ] * 4
    assert timeline[3].ceiling == 900


def test_latest_starting_containing_period_wins():
    base = make_period(NOW - timedelta(hours=1), 10)
    later = make_period(NOW + timedelta(hours=2), 8, change_type=ForecastChangeType.FROM)

    assert find_applicable_period([base, later], NOW + timedelta(hours=3)) is later
    assert find_applicable_period([base, later], NOW) is base


def test_future_period_is_used_before_it_starts():
    upcoming = make_period(NOW + timedelta(hours=2), 6, clouds=[layer("OVC", 700)])

    timeline = generate_forecast_timeline([upcoming], now=NOW)

    assert len(timeline) == 7
    assert timeline[0].ceiling == 700


def test_expired_periods_fall_back_to_first_period():
    old = make_period(NOW - timedelta(hours=10), 2)

    assert find_applicable_period([old], NOW) is old


def test_horizon_override(monkeypatch):
    periods = [make_period(NOW, 24)]

    assert len(generate_forecast_timeline(periods, now=NOW, horizon_hours=3)) == 4

    monkeypatch.setattr(settings, "timeline_horizon_hours", 2)
    assert len(generate_forecast_timeline(periods, now=NOW)) == 3


def test_clear_period_has_no_ceiling():
    timeline = generate_forecast_timeline(
        [make_period(NOW, 24, clouds=[layer("FEW", 4000), layer("SCT", 8000)])], now=NOW
    )

    assert timeline[0].ceiling is None
    assert len(timeline[0].clouds) == 2
