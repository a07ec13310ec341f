"""Time and number formatting shared by the evaluators."""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Optional, Union

SENTINEL_TEXT = "N/A"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(moment: Optional[datetime]) -> datetime:
    """Return ``moment`` as an aware UTC datetime; naive input is taken as UTC."""

    if moment is None:
        return utc_now()
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def epoch_millis(moment: datetime) -> int:
    return int(as_utc(moment).timestamp() * 1000)


def format_zulu(moment: datetime) -> str:
    """HHMMZ, e.g. ``1430Z``."""

    return as_utc(moment).strftime("%H%MZ")


def format_clock(moment: datetime, tz: tzinfo) -> str:
    """HH:MM in the given zone."""

    return as_utc(moment).astimezone(tz).strftime("%H:%M")


def format_hhmm_tz(moment: Optional[datetime], tz: tzinfo) -> str:
    """HHMM plus zone abbreviation, or ``N/A`` for a missing instant."""

    if moment is None:
        return SENTINEL_TEXT
    local = as_utc(moment).astimezone(tz)
    abbr = local.strftime("%Z")
    time_text = local.strftime("%H%M")
    return f"{time_text} {abbr}" if abbr else time_text


def format_number(value: Union[int, float]) -> str:
    """Render whole floats without a trailing ``.0``."""

    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return f"{value:g}" if isinstance(value, float) else str(value)


__all__ = [
    "SENTINEL_TEXT",
    "as_utc",
    "epoch_millis",
    "format_clock",
    "format_hhmm_tz",
    "format_number",
    "format_zulu",
    "utc_now",
]
