from __future__ import annotations

import re
from datetime import date, timedelta
from decimal import Decimal

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

MINUTES_PER_DAY = 24 * 60

# date.weekday() index -> storage key. Hours are always stored with English keys.
WEEKDAY_KEYS: tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

# Day names as rendered by the French dashboard -> storage key.
FRENCH_DAY_NAMES: dict[str, str] = {
    "lundi": "monday",
    "mardi": "tuesday",
    "mercredi": "wednesday",
    "jeudi": "thursday",
    "vendredi": "friday",
    "samedi": "saturday",
    "dimanche": "sunday",
}


def parse_hhmm(value: str) -> int:
    """Convert a wall-clock ``"HH:MM"`` string to minutes since midnight.

    ``"24:00"`` is accepted as the end of the day so a center can close at
    midnight.
    """
    match = _HHMM_RE.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes >= 60 or hours > 24 or (hours == 24 and minutes):
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    return hours * 60 + minutes


def format_minutes(total: int) -> str:
    if total < 0 or total > MINUTES_PER_DAY:
        raise ValueError(f"{total} minutes is outside a single day")
    return f"{total // 60:02d}:{total % 60:02d}"


def normalize_hhmm(value: str) -> str:
    """Return ``value`` zero-padded, e.g. ``"9:30"`` -> ``"09:30"``."""
    return format_minutes(parse_hhmm(value))


def to_decimal_hour(value: str) -> float:
    return parse_hhmm(value) / 60


def format_decimal_hour(decimal_hour: float) -> str:
    hours = int(decimal_hour)
    minutes = round((decimal_hour - hours) * 60)
    if minutes == 60:
        hours, minutes = hours + 1, 0
    return f"{hours:02d}:{minutes:02d}"


def duration_minutes(start: str, end: str) -> int:
    return parse_hhmm(end) - parse_hhmm(start)


def duration_hours(start: str, end: str) -> Decimal:
    return Decimal(duration_minutes(start, end)) / Decimal(60)


def shift_interval(start: str, end: str, new_start: str) -> tuple[str, str]:
    """Move ``[start, end)`` so it begins at ``new_start``, keeping its length."""
    length = duration_minutes(start, end)
    begin = parse_hhmm(new_start)
    return format_minutes(begin), format_minutes(begin + length)


def weekday_key(day: date) -> str:
    return WEEKDAY_KEYS[day.weekday()]


def localized_day_to_key(name: str) -> str:
    """Map a French day label (any case) to its storage key.

    Raises ``KeyError`` for unknown labels rather than guessing, since a bad
    key would silently read as a day without hours.
    """
    return FRENCH_DAY_NAMES[name.strip().lower()]


def week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def week_days(day: date) -> list[date]:
    monday = week_start(day)
    return [monday + timedelta(days=offset) for offset in range(7)]


def week_range(day: date) -> tuple[date, date]:
    monday = week_start(day)
    return monday, monday + timedelta(days=6)


def week_number(day: date) -> int:
    return day.isocalendar()[1]
