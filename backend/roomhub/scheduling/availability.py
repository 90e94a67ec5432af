"""Availability of a room given its organization's weekly operating hours.

``hours`` is the organization's mapping of weekday key to
``{"open": "HH:MM", "close": "HH:MM", "closed": bool}``. It is always passed
in by the caller; nothing here loads it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional

from roomhub.scheduling.errors import ClosedDay, InvalidRange, OutOfHours
from roomhub.scheduling.timeutils import parse_hhmm, weekday_key

OperatingHours = Mapping[str, Optional[Mapping[str, Any]]]

DEFAULT_TIMETABLE_RANGE = (8, 19)
FALLBACK_TIMETABLE_RANGE = (8, 21)


@dataclass(frozen=True)
class DayWindow:
    open: bool
    open_time: Optional[str] = None
    close_time: Optional[str] = None


CLOSED = DayWindow(open=False)


def _open_bounds(entry: Optional[Mapping[str, Any]]) -> Optional[tuple[str, str]]:
    if not entry or entry.get("closed"):
        return None
    open_time, close_time = entry.get("open"), entry.get("close")
    if not open_time or not close_time:
        return None
    return open_time, close_time


def is_open_on(hours: OperatingHours, day: date) -> DayWindow:
    bounds = _open_bounds(hours.get(weekday_key(day)))
    if bounds is None:
        return CLOSED
    return DayWindow(open=True, open_time=bounds[0], close_time=bounds[1])


def timetable_range(hours: Optional[OperatingHours]) -> tuple[int, int]:
    """Earliest opening hour and latest closing hour across the week.

    Used to size the weekly grid, so it never returns an empty range.
    """
    if not hours:
        return DEFAULT_TIMETABLE_RANGE

    earliest_open = 24
    latest_close = 0
    for entry in hours.values():
        bounds = _open_bounds(entry)
        if bounds is None:
            continue
        earliest_open = min(earliest_open, parse_hhmm(bounds[0]) // 60)
        latest_close = max(latest_close, parse_hhmm(bounds[1]) // 60)

    if earliest_open == 24 or latest_close == 0:
        return FALLBACK_TIMETABLE_RANGE
    return earliest_open, latest_close


def validate_window(
    hours: Optional[OperatingHours],
    day: date,
    start: str,
    end: str,
) -> None:
    """Gate every booking creation and reschedule.

    Raises ``InvalidRange``, ``ClosedDay`` or ``OutOfHours``. With no hours
    data at all (``None`` or an empty mapping) only the range is checked.
    """
    try:
        start_minutes = parse_hhmm(start)
        end_minutes = parse_hhmm(end)
    except ValueError as exc:
        raise InvalidRange(str(exc)) from None
    if end_minutes <= start_minutes:
        raise InvalidRange("End time must be after start time")

    if not hours:
        return

    window = is_open_on(hours, day)
    if not window.open:
        raise ClosedDay(f"The center is closed on {weekday_key(day)}")

    if start_minutes < parse_hhmm(window.open_time) or end_minutes > parse_hhmm(window.close_time):
        raise OutOfHours(window.open_time, window.close_time)
