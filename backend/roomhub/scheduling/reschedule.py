"""Moving an existing booking to another day or time slot.

This is the commit step behind the owner's drag-and-drop timetable: the
gesture itself lives in the UI, validation happens here at drop time.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Optional, Union

from roomhub.scheduling.availability import OperatingHours, validate_window
from roomhub.scheduling.conflicts import find_conflict
from roomhub.scheduling.errors import InvalidRange, SlotTaken
from roomhub.scheduling.lifecycle import Quote, price
from roomhub.scheduling.status import CONFIRM_BLOCKING
from roomhub.scheduling.timeutils import normalize_hhmm, shift_interval


@dataclass(frozen=True)
class ReschedulePlan:
    booking_id: Any
    date: date
    start_time: str
    end_time: str
    quote: Optional[Quote] = None

    def apply(self, booking: Any) -> Any:
        booking.date = self.date
        booking.start_time = self.start_time
        booking.end_time = self.end_time
        if self.quote is not None:
            booking.total_amount = self.quote.total_amount
            booking.commission = self.quote.commission
        return booking


def plan_reschedule(
    booking: Any,
    hours: Optional[OperatingHours],
    others: Iterable[Any],
    new_date: date,
    new_start: str,
    new_end: Optional[str] = None,
    hourly_rate: Optional[Union[Decimal, int, float, str]] = None,
) -> ReschedulePlan:
    """Validate a move without touching ``booking``.

    When ``new_end`` is omitted the whole interval is shifted and keeps its
    duration. Only CONFIRMED bookings block the move; landing on PENDING ones
    produces a conflict group to resolve by hand.
    """
    try:
        if new_end is None:
            new_start, new_end = shift_interval(booking.start_time, booking.end_time, new_start)
        else:
            new_start, new_end = normalize_hhmm(new_start), normalize_hhmm(new_end)
    except ValueError as exc:
        raise InvalidRange(str(exc)) from None

    validate_window(hours, new_date, new_start, new_end)

    blocker = find_conflict(
        others,
        booking.room_id,
        new_date,
        new_start,
        new_end,
        exclude_id=booking.id,
        blocking_statuses=CONFIRM_BLOCKING,
    )
    if blocker is not None:
        raise SlotTaken(
            "Cannot move booking: conflict with a confirmed reservation",
            booking_id=blocker.id,
        )

    quote = price(hourly_rate, new_start, new_end) if hourly_rate is not None else None
    return ReschedulePlan(
        booking_id=booking.id,
        date=new_date,
        start_time=new_start,
        end_time=new_end,
        quote=quote,
    )


def reschedule(
    booking: Any,
    hours: Optional[OperatingHours],
    others: Iterable[Any],
    new_date: date,
    new_start: str,
    new_end: Optional[str] = None,
    hourly_rate: Optional[Union[Decimal, int, float, str]] = None,
) -> Any:
    """Validate then apply a move. The status is left as it was."""
    plan = plan_reschedule(
        booking,
        hours,
        others,
        new_date,
        new_start,
        new_end,
        hourly_rate=hourly_rate,
    )
    return plan.apply(booking)
