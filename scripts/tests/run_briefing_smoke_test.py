#!/usr/bin/env python
# Runs every evaluator over a synthetic briefing built around the current time.
import json
from datetime import datetime, timedelta, timezone

from wxrisk.config import DEFAULT_PERSONAL_MINIMUMS, DEFAULT_THRESHOLDS, configure_logging
from wxrisk.models import (
    CloudLayer,
    ForecastPeriod,
    GeoLocation,
    NormalizedObservation,
    Visibility,
    Wind,
)
from wxrisk.services import (
    analyze_weather_trends,
    calculate_departure_windows,
    detect_weather_changes,
    evaluate_alerts,
    evaluate_minimums,
    get_sun_info,
)

STATION = "KBOI"
LOCATION = GeoLocation(lat=43.5644, lon=-116.2228, elevation=874)
RUNWAY_HEADING = 100


def build_observations(now):
    """Briefing-time METAR and a later SPECI with lowering conditions."""
    briefed = NormalizedObservation(
        station=STATION,
        observation_time=now - timedelta(minutes=50),
        temperature_c=14.0,
        dewpoint_c=6.0,
        wind=Wind(direction=120, speed=9),
        visibility=Visibility(sm=10, is_plus=True),
        altimeter=30.02,
        clouds=[CloudLayer(cover="SCT", base=6000)],
        raw_text="KBOI 101753Z 12009KT 10SM SCT060 14/06 A3002",
        location=LOCATION,
    )
    latest = NormalizedObservation(
        station=STATION,
        observation_time=now,
        is_speci=True,
        temperature_c=11.0,
        dewpoint_c=9.0,
        wind=Wind(direction=160, speed=16, gust=28),
        visibility=Visibility(sm=4),
        altimeter=29.64,
        clouds=[CloudLayer(cover="BKN", base=1800), CloudLayer(cover="OVC", base=3500)],
        present_weather="-TSRA",
        raw_text="KBOI 101843Z 16016G28KT 4SM -TSRA BKN018 OVC035 11/09 A2964",
        location=LOCATION,
    )
    return briefed, latest


def build_forecast(now):
    """Base period, a storm line from +2h and a clearing trend from +5h."""
    return [
        ForecastPeriod(
            time_from=now - timedelta(hours=2),
            time_to=now + timedelta(hours=2),
            wind=Wind(direction=140, speed=12),
            visibility="P6SM",
            clouds=[CloudLayer(cover="BKN", base=4000)],
        ),
        ForecastPeriod(
            time_from=now + timedelta(hours=1),
            time_to=now + timedelta(hours=3),
            change_type="TEMPO",
            wind=Wind(direction=180, speed=20, gust=35),
            visibility="2",
            clouds=[CloudLayer(cover="BKN", base=1200)],
            present_weather="TSRA",
        ),
        ForecastPeriod(
            time_from=now + timedelta(hours=2),
            time_to=now + timedelta(hours=5),
            change_type="FM",
            wind=Wind(direction=200, speed=18, gust=30),
            visibility="3",
            clouds=[CloudLayer(cover="OVC", base=1500)],
            present_weather="-SHRA",
        ),
        ForecastPeriod(
            time_from=now + timedelta(hours=5),
            time_to=now + timedelta(hours=12),
            change_type="FM",
            wind=Wind(direction=300, speed=8),
            visibility="P6SM",
            clouds=[CloudLayer(cover="SCT", base=5000)],
        ),
    ]


def show(title, payload):
    print(f"\n=== {title} ===")
    print(json.dumps(payload, indent=2, default=str))


def main():
    configure_logging("DEBUG")
    now = datetime.now(timezone.utc)
    briefed, latest = build_observations(now)
    forecast = build_forecast(now)

    show("Sun", get_sun_info(LOCATION.lat, LOCATION.lon, now).model_dump(mode="json"))
    show(
        "Alerts",
        [
            a.model_dump(mode="json")
            for a in evaluate_alerts(latest, DEFAULT_THRESHOLDS, RUNWAY_HEADING, now=now)
        ],
    )
    show(
        "Minimums",
        evaluate_minimums(latest, DEFAULT_PERSONAL_MINIMUMS, RUNWAY_HEADING).model_dump(
            mode="json"
        ),
    )
    show(
        "Departure windows",
        calculate_departure_windows(forecast, DEFAULT_PERSONAL_MINIMUMS, now=now).model_dump(
            mode="json"
        ),
    )
    show(
        "Trends",
        [t.model_dump(mode="json") for t in analyze_weather_trends(latest, forecast, now=now)],
    )
    show(
        "Changes since briefing",
        [c.model_dump(mode="json") for c in detect_weather_changes(briefed, latest, now=now)],
    )


if __name__ == "__main__":
    main()
