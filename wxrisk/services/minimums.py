"""Personal minimums evaluation and night tightening."""

from __future__ import annotations

import logging
from typing import Optional

from wxrisk.models.limits import MinimumsResult, MinimumsViolation, PersonalMinimums
from wxrisk.models.weather import NormalizedObservation
from wxrisk.services.wind import crosswind_component

logger = logging.getLogger("wxrisk.minimums")

NIGHT_CEILING_FT = 1500
NIGHT_VISIBILITY_SM = 5


def night_minimums(base: PersonalMinimums) -> PersonalMinimums:
    """Raise ceiling and visibility floors for night VFR.

    Uses a conservative reading of 14 CFR 91.157 (1500 ft / 5 SM). A pilot
    limit that is already stricter is kept, so applying this twice is the
    same as applying it once.
    """

    return base.model_copy(
        update={
            "ceiling": max(base.ceiling, NIGHT_CEILING_FT),
            "visibility": max(base.visibility, NIGHT_VISIBILITY_SM),
        }
    )


def evaluate_minimums(
    observation: NormalizedObservation,
    minimums: PersonalMinimums,
    runway_heading: Optional[float] = None,
) -> MinimumsResult:
    """Compare one observation against the pilot's limits."""

    violations: list[MinimumsViolation] = []
    wind = observation.wind

    if observation.ceiling is not None and observation.ceiling < minimums.ceiling:
        violations.append(
            MinimumsViolation(
                field="ceiling",
                label="Ceiling",
                current=observation.ceiling,
                limit=minimums.ceiling,
                unit="ft",
            )
        )

    if observation.visibility.sm < minimums.visibility:
        violations.append(
            MinimumsViolation(
                field="visibility",
                label="Visibility",
                current=observation.visibility.sm,
                limit=minimums.visibility,
                unit="SM",
            )
        )

    if not wind.is_variable and wind.speed > minimums.max_wind:
        violations.append(
            MinimumsViolation(
                field="max_wind",
                label="Wind Speed",
                current=wind.speed,
                limit=minimums.max_wind,
                unit="kts",
            )
        )

    if wind.gust and wind.gust > minimums.max_gust:
        violations.append(
            MinimumsViolation(
                field="max_gust",
                label="Gust",
                current=wind.gust,
                limit=minimums.max_gust,
                unit="kts",
            )
        )

    if runway_heading is not None and not wind.is_variable and wind.speed > 0:
        crosswind = round(crosswind_component(runway_heading, wind.direction, wind.speed))
        if crosswind > minimums.crosswind:
            violations.append(
                MinimumsViolation(
                    field="crosswind",
                    label="Crosswind",
                    current=crosswind,
                    limit=minimums.crosswind,
                    unit="kts",
                )
            )

    if violations:
        logger.debug(
            "%s breaches %d minimums: %s",
            observation.station,
            len(violations),
            ", ".join(v.field for v in violations),
        )
    return MinimumsResult(breached=bool(violations), violations=violations)


__all__ = ["NIGHT_CEILING_FT", "NIGHT_VISIBILITY_SM", "evaluate_minimums", "night_minimums"]
