from datetime import datetime, timedelta, timezone

from factories import layer, make_observation, make_period
from wxrisk.config import settings
from wxrisk.domain import ForecastChangeType, TrendDirection
from wxrisk.models import Visibility, Wind
from wxrisk.services.trends import analyze_weather_trends, describe_change, trend_direction

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)


def by_metric(trends):
    return {t.metric: t for t in trends}


def test_trend_direction_threshold_is_exclusive():
    assert trend_direction(501, 500) == TrendDirection.IMPROVING
    assert trend_direction(500, 500) == TrendDirection.STABLE
    assert trend_direction(-501, 500) == TrendDirection.DETERIORATING


def test_describe_change():
    assert describe_change("Ceiling", 3000, 3200, "ft", TrendDirection.STABLE) == (
        "Ceiling expected to remain around 3000 ft"
    )
    assert describe_change("Visibility", 10, 4, "SM", TrendDirection.DETERIORATING) == (
        "Visibility dropping from 10 to 4 SM"
    )


def test_deteriorating_forecast():
    obs = make_observation(clouds=[layer("BKN", 3000)], wind=Wind(direction=270, speed=10))
    periods = [
        make_period(
            NOW - timedelta(hours=1),
            12,
            clouds=[layer("BKN", 2000)],
            visibility="4",
            wind=Wind(direction=270, speed=18),
        )
    ]

    trends = analyze_weather_trends(obs, periods, now=NOW)

    assert [t.metric for t in trends] == ["Ceiling", "Visibility", "Wind", "Flight Category"]
    assert all(t.direction == TrendDirection.DETERIORATING for t in trends)
    metrics = by_metric(trends)
    assert metrics["Ceiling"].current_value == "3000 ft"
    assert metrics["Ceiling"].forecast_value == "2000 ft"
    assert metrics["Visibility"].description == "Visibility dropping from 10 to 4 SM"
    assert metrics["Wind"].description == "Wind increasing from 10 to 18 kts"
    assert metrics["Flight Category"].current_value == "VFR"
    assert metrics["Flight Category"].forecast_value == "MVFR"


def test_stable_forecast_omits_flight_category():
    obs = make_observation(clouds=[layer("BKN", 4000)], visibility=Visibility(sm=6))
    periods = [make_period(NOW - timedelta(hours=1), 12, clouds=[layer("BKN", 4200)])]

    trends = analyze_weather_trends(obs, periods, now=NOW)

    assert [t.metric for t in trends] == ["Ceiling", "Visibility", "Wind"]
    assert all(t.direction == TrendDirection.STABLE for t in trends)
    assert by_metric(trends)["Wind"].description == "Wind speed expected to remain steady"


def test_ceiling_expected_to_clear():
    obs = make_observation(clouds=[layer("OVC", 1000)])
    periods = [make_period(NOW, 12, clouds=[layer("SCT", 4000)], visibility="10")]

    ceiling = by_metric(analyze_weather_trends(obs, periods, now=NOW))["Ceiling"]

    assert ceiling.direction == TrendDirection.IMPROVING
    assert ceiling.forecast_value == "Clear"


def test_ceiling_expected_to_develop():
    obs = make_observation(clouds=[layer("FEW", 5000)])
    periods = [make_period(NOW, 12, clouds=[layer("BKN", 1500)], visibility="10")]

    ceiling = by_metric(analyze_weather_trends(obs, periods, now=NOW))["Ceiling"]

    assert ceiling.direction == TrendDirection.DETERIORATING
    assert ceiling.current_value == "Clear"
    assert ceiling.description == "Ceiling expected to develop at 1500 ft"


def test_no_ceiling_trend_when_clear_throughout():
    obs = make_observation(clouds=[])
    periods = [make_period(NOW, 12, clouds=[], visibility="10")]

    trends = analyze_weather_trends(obs, periods, now=NOW)

    assert "Ceiling" not in by_metric(trends)


def test_wind_decrease_is_improving():
    obs = make_observation(wind=Wind(direction=270, speed=20))
    periods = [make_period(NOW, 12, visibility="10", wind=Wind(direction=270, speed=8))]

    wind = by_metric(analyze_weather_trends(obs, periods, now=NOW))["Wind"]

    assert wind.direction == TrendDirection.IMPROVING


def test_compares_against_two_hours_out():
    obs = make_observation(clouds=[layer("BKN", 5000)])
    periods = [
        make_period(NOW, 1, clouds=[layer("BKN", 5000)], visibility="10"),
        make_period(
            NOW + timedelta(hours=1),
            1,
            change_type=ForecastChangeType.FROM,
            clouds=[layer("BKN", 5000)],
            visibility="10",
        ),
        make_period(
            NOW + timedelta(hours=2),
            10,
            change_type=ForecastChangeType.FROM,
            clouds=[layer("OVC", 800)],
            visibility="10",
        ),
    ]

    ceiling = by_metric(analyze_weather_trends(obs, periods, now=NOW))["Ceiling"]

    assert ceiling.forecast_value == "800 ft"


def test_short_timeline_compares_against_next_point(monkeypatch):
    monkeypatch.setattr(settings, "timeline_horizon_hours", 1)
    obs = make_observation(clouds=[layer("BKN", 5000)])
    periods = [
        make_period(NOW, 1, clouds=[layer("BKN", 5000)], visibility="10"),
        make_period(
            NOW + timedelta(hours=1),
            10,
            change_type=ForecastChangeType.FROM,
            clouds=[layer("OVC", 3000)],
            visibility="10",
        ),
    ]

    ceiling = by_metric(analyze_weather_trends(obs, periods, now=NOW))["Ceiling"]

    assert ceiling.forecast_value == "3000 ft"


def test_insufficient_forecast_gives_no_trends():
    assert analyze_weather_trends(make_observation(), [], now=NOW) == []

    tempo_only = [make_period(NOW, 6, change_type=ForecastChangeType.TEMPORARY)]
    assert analyze_weather_trends(make_observation(), tempo_only, now=NOW) == []
