"""Read models for the owner's weekly timetable and a room's day view."""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlmodel import Session

from roomhub.models import Room
from roomhub.scheduling import DayWindow, conflicted_ids, group_conflicts, is_open_on, timetable_range
from roomhub.scheduling.availability import OperatingHours
from roomhub.scheduling.timeutils import to_decimal_hour, week_days, week_number, weekday_key
from roomhub.schemas import (
    BookingRead,
    ConflictGroupRead,
    RoomDayAvailability,
    RoomTimetable,
    TimetableBooking,
    TimetableDay,
)
from roomhub.services.bookings import active_bookings_for_room
from roomhub.services.hours import get_organization_hours


def _day_window(hours: Optional[OperatingHours], day: date) -> DayWindow:
    # No configured hours: every day is bookable
    if not hours:
        return DayWindow(open=True)
    return is_open_on(hours, day)


def _conflict_read(group) -> ConflictGroupRead:
    return ConflictGroupRead(
        room_id=group.room_id,
        date=group.date,
        start_time=group.start_time,
        end_time=group.end_time,
        bookings=[BookingRead.model_validate(b) for b in group.bookings],
    )


def room_day_availability(session: Session, room: Room, day: date) -> RoomDayAvailability:
    hours = get_organization_hours(session, room.organization_id)
    window = _day_window(hours, day)
    bookings = active_bookings_for_room(session, room.id, day, day)
    return RoomDayAvailability(
        room_id=room.id,
        date=day,
        open=window.open,
        open_time=window.open_time,
        close_time=window.close_time,
        bookings=[BookingRead.model_validate(b) for b in bookings],
    )


def room_timetable(session: Session, room: Room, day: date) -> RoomTimetable:
    """Monday-to-Sunday grid for the week containing ``day``.

    Overlapping PENDING/CONFIRMED bookings are flagged and listed as conflict
    groups so the owner can pick a winner.
    """
    hours = get_organization_hours(session, room.organization_id)
    days = week_days(day)
    bookings = active_bookings_for_room(session, room.id, days[0], days[-1])
    groups = group_conflicts(bookings)
    flagged = conflicted_ids(groups)
    start_hour, end_hour = timetable_range(hours)

    timetable_days = []
    for current in days:
        window = _day_window(hours, current)
        timetable_days.append(
            TimetableDay(
                date=current,
                weekday=weekday_key(current),
                open=window.open,
                open_time=window.open_time,
                close_time=window.close_time,
            )
        )

    timetable_bookings = [
        TimetableBooking(
            **BookingRead.model_validate(b).model_dump(),
            start_hour=to_decimal_hour(b.start_time),
            end_hour=to_decimal_hour(b.end_time),
            is_conflicted=b.id in flagged,
        )
        for b in bookings
    ]

    return RoomTimetable(
        room_id=room.id,
        week_number=week_number(day),
        week_start=days[0],
        week_end=days[-1],
        start_hour=start_hour,
        end_hour=end_hour,
        days=timetable_days,
        bookings=timetable_bookings,
        conflicts=[_conflict_read(g) for g in groups],
    )
