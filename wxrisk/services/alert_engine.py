"""Run every alert rule over one observation and rank the results."""

from __future__ import annotations

from datetime import datetime
import logging
from typing import Optional, Sequence

from wxrisk.domain import severity_rank
from wxrisk.models.limits import Thresholds
from wxrisk.models.results import AlertCondition
from wxrisk.models.weather import NormalizedObservation
from wxrisk.services.alert_rules import ALL_RULES, AlertRule
from wxrisk.services.formatting import as_utc

logger = logging.getLogger("wxrisk.alert_engine")


def evaluate_alerts(
    observation: NormalizedObservation,
    thresholds: Thresholds,
    runway_heading: Optional[float] = None,
    *,
    now: Optional[datetime] = None,
    rules: Sequence[AlertRule] = ALL_RULES,
) -> list[AlertCondition]:
    """Return all triggered conditions, red first, then amber, then green.

    The sort is stable so rules of equal severity keep their rule order.
    """

    moment = as_utc(now)
    alerts = [
        alert
        for alert in (rule(observation, thresholds, runway_heading, moment) for rule in rules)
        if alert is not None
    ]
    alerts.sort(key=lambda alert: severity_rank(alert.severity))

    logger.debug(
        "Evaluated %d rules for %s: %d alerts (%s)",
        len(rules),
        observation.station,
        len(alerts),
        ", ".join(f"{a.type.value}:{a.severity.value}" for a in alerts) or "none",
    )
    return alerts


__all__ = ["evaluate_alerts"]
