"""Configuration settings for the weather risk engine."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import timezone, tzinfo
from zoneinfo import ZoneInfo

from wxrisk.models.limits import Band, PersonalMinimums, Thresholds

logger = logging.getLogger("wxrisk.config")


@dataclass
class Settings:
    """Engine configuration loaded from environment variables."""

    wxrisk_env: str = os.getenv("WXRISK_ENV", "local")
    log_level: str = os.getenv("WXRISK_LOG_LEVEL", "INFO")

    # Zone used for human-readable times in advisories and sun info
    local_timezone: str = os.getenv("WXRISK_LOCAL_TZ", "UTC")

    # Forecast sampling
    timeline_horizon_hours: int = int(os.getenv("WXRISK_TIMELINE_HOURS", "6"))
    window_sample_minutes: int = int(os.getenv("WXRISK_WINDOW_SAMPLE_MINUTES", "30"))

    # Alert rules
    low_altimeter_inhg: float = float(os.getenv("WXRISK_LOW_ALTIMETER_INHG", "29.70"))

    def local_tz(self) -> tzinfo:
        """Return the configured local zone, falling back to UTC."""

        try:
            return ZoneInfo(self.local_timezone)
        except (KeyError, ValueError) as exc:
            logger.warning("Unknown time zone %r, using UTC: %s", self.local_timezone, exc)
            return timezone.utc


settings = Settings()

DEFAULT_THRESHOLDS = Thresholds(
    crosswind=Band(amber=10, red=15),
    temp_dewpoint_spread=Band(amber=3, red=2),
    ceiling=Band(amber=2000, red=1000),
    visibility=Band(amber=5, red=3),
    gust_factor=10,
    low_altimeter=settings.low_altimeter_inhg,
)

DEFAULT_PERSONAL_MINIMUMS = PersonalMinimums(
    ceiling=3000,
    visibility=5,
    crosswind=15,
    max_gust=25,
    max_wind=25,
)


def configure_logging(level: str | None = None) -> None:
    """Install a basic root handler for scripts and local runs.

    The library itself never calls this; embedding applications own their
    logging setup.
    """

    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )


__all__ = [
    "settings",
    "Settings",
    "DEFAULT_THRESHOLDS",
    "DEFAULT_PERSONAL_MINIMUMS",
    "configure_logging",
]
