"""Runway wind component calculations."""

from __future__ import annotations

import math

from wxrisk.models.results import WindComponents

# Within this many degrees of the runway the crosswind side is "none"
ALIGNED_TOLERANCE_DEG = 5


def wrap_angle(diff: float) -> float:
    """Normalize an angle difference to [-180, 180]."""

    return ((diff + 180) % 360) - 180


def crosswind_component(heading: float, wind_direction: float, wind_speed: float) -> float:
    """Unrounded crosswind magnitude in knots."""

    angle = math.radians(wrap_angle(wind_direction - heading))
    return abs(wind_speed * math.sin(angle))


def wind_components(heading: float, wind_direction: float, wind_speed: float) -> WindComponents:
    """Headwind (negative = tailwind) and crosswind, rounded to whole knots.

    >>> wind_components(360, 330, 20)
    WindComponents(headwind=17, crosswind=10, crosswind_side='left')
    """

    diff = wrap_angle(wind_direction - heading)
    angle = math.radians(diff)

    if abs(diff) < ALIGNED_TOLERANCE_DEG:
        side = "none"
    else:
        side = "right" if diff > 0 else "left"

    return WindComponents(
        headwind=round(wind_speed * math.cos(angle)),
        crosswind=round(abs(wind_speed * math.sin(angle))),
        crosswind_side=side,
    )


__all__ = ["crosswind_component", "wind_components", "wrap_angle"]
