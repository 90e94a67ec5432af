"""Overlap detection between bookings of the same room and day.

Bookings are read through their attributes only (``id``, ``room_id``,
``date``, ``start_time``, ``end_time``, ``status``), so the functions work on
``roomhub.models.Booking`` rows as well as on any lightweight stand-in.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, Optional

from roomhub.scheduling.status import CREATION_BLOCKING, BookingStatus
from roomhub.scheduling.timeutils import format_minutes, parse_hhmm


def intervals_overlap(start1: int, end1: int, start2: int, end2: int) -> bool:
    """Half-open intervals: touching endpoints do not overlap."""
    return start1 < end2 and end1 > start2


def _status(booking: Any) -> BookingStatus:
    return BookingStatus(booking.status)


def _bounds(booking: Any) -> tuple[int, int]:
    return parse_hhmm(booking.start_time), parse_hhmm(booking.end_time)


def find_conflict(
    existing: Iterable[Any],
    room_id: Any,
    day: date,
    start: str,
    end: str,
    exclude_id: Optional[Any] = None,
    blocking_statuses: Iterable[BookingStatus] = CREATION_BLOCKING,
) -> Optional[Any]:
    """Return the first booking blocking ``[start, end)``, or ``None``."""
    blocking = frozenset(BookingStatus(s) for s in blocking_statuses)
    start_minutes, end_minutes = parse_hhmm(start), parse_hhmm(end)

    for booking in existing:
        if booking.room_id != room_id or booking.date != day:
            continue
        if exclude_id is not None and booking.id == exclude_id:
            continue
        if _status(booking) not in blocking:
            continue
        other_start, other_end = _bounds(booking)
        if intervals_overlap(start_minutes, end_minutes, other_start, other_end):
            return booking
    return None


@dataclass
class ConflictGroup:
    room_id: Any
    date: date
    bookings: list[Any] = field(default_factory=list)
    start: int = 0
    end: int = 0

    @property
    def start_time(self) -> str:
        return format_minutes(self.start)

    @property
    def end_time(self) -> str:
        return format_minutes(self.end)

    @property
    def booking_ids(self) -> list[Any]:
        return [booking.id for booking in self.bookings]

    def __len__(self) -> int:
        return len(self.bookings)


def group_conflicts(bookings: Iterable[Any]) -> list[ConflictGroup]:
    """Partition contending bookings into connected overlap components.

    Only PENDING and CONFIRMED bookings take part. Components are found per
    ``(room_id, date)`` bucket with a sweep over start times: a booking joins
    the running group while it starts before the group's furthest end, so
    chains A-B, B-C land in one group even when A and C do not overlap.
    """
    buckets: dict[tuple[Any, date], list[Any]] = defaultdict(list)
    for booking in bookings:
        if _status(booking) in CREATION_BLOCKING:
            buckets[(booking.room_id, booking.date)].append(booking)

    groups: list[ConflictGroup] = []
    for (room_id, day), members in buckets.items():
        members.sort(key=lambda b: (_bounds(b), str(b.id)))
        current: Optional[ConflictGroup] = None
        for booking in members:
            start, end = _bounds(booking)
            if current is not None and start < current.end:
                current.bookings.append(booking)
                current.end = max(current.end, end)
                continue
            if current is not None and len(current) > 1:
                groups.append(current)
            current = ConflictGroup(room_id=room_id, date=day, bookings=[booking], start=start, end=end)
        if current is not None and len(current) > 1:
            groups.append(current)

    groups.sort(key=lambda g: (g.date, str(g.room_id), g.start))
    return groups


def conflicted_ids(groups: Iterable[ConflictGroup]) -> set[Any]:
    return {booking_id for group in groups for booking_id in group.booking_ids}
