from .categories import (
    CEILING_COVERS,
    AlertType,
    ChangeType,
    CloudCover,
    FlightCategory,
    ForecastChangeType,
    Severity,
    TrendDirection,
    category_rank,
    flight_category,
    severity_rank,
)

__all__ = [
    "AlertType",
    "CEILING_COVERS",
    "ChangeType",
    "CloudCover",
    "FlightCategory",
    "ForecastChangeType",
    "Severity",
    "TrendDirection",
    "category_rank",
    "flight_category",
    "severity_rank",
]
