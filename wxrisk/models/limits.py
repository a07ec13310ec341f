"""Alert thresholds and pilot personal minimums."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class Band(BaseModel):
    """Amber/red bounds for one metric.

    Precondition: ``amber`` is the less severe bound. For "lower is worse"
    metrics (ceiling, visibility, spread) that means amber >= red; for
    crosswind amber <= red. The ordering is not validated.
    """

    model_config = ConfigDict(frozen=True)

    amber: float = Field(..., description="Caution bound")
    red: float = Field(..., description="Warning bound")


class Thresholds(BaseModel):
    """Hazard alert bands."""

    model_config = ConfigDict(frozen=True)

    crosswind: Band = Field(..., description="Crosswind component in knots")
    temp_dewpoint_spread: Band = Field(
        ..., description="Temperature/dewpoint spread in Celsius",
    )
    ceiling: Band = Field(..., description="Ceiling in feet AGL")
    visibility: Band = Field(..., description="Visibility in statute miles")
    gust_factor: float = Field(
        ..., description="Gust minus sustained speed, in knots, that triggers an advisory",
    )
    low_altimeter: float = Field(
        default=29.70, description="Altimeter (inHg) below which a low-pressure advisory fires",
    )


class PersonalMinimums(BaseModel):
    """Pilot-configured go/no-go limits."""

    model_config = ConfigDict(frozen=True)

    ceiling: float = Field(..., description="Lowest acceptable ceiling in feet AGL")
    visibility: float = Field(..., description="Lowest acceptable visibility in SM")
    crosswind: float = Field(..., description="Highest acceptable crosswind in knots")
    max_gust: float = Field(..., description="Highest acceptable gust in knots")
    max_wind: float = Field(..., description="Highest acceptable sustained wind in knots")


MinimumsField = Literal["ceiling", "visibility", "crosswind", "max_gust", "max_wind"]


class MinimumsViolation(BaseModel):
    model_config = ConfigDict(frozen=True)

    field: MinimumsField = Field(..., description="Minimums field that was breached")
    label: str = Field(..., description="Display label")
    current: float = Field(..., description="Observed value")
    limit: float = Field(..., description="Configured limit")
    unit: str = Field(..., description="Unit of current/limit")


class MinimumsResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    breached: bool = Field(..., description="True when any limit is violated")
    violations: list[MinimumsViolation] = Field(default_factory=list)


__all__ = [
    "Band",
    "MinimumsResult",
    "MinimumsViolation",
    "PersonalMinimums",
    "Thresholds",
]
