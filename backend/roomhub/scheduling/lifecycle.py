"""Booking status state machine and pricing."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, Optional, Union

from roomhub.scheduling.conflicts import ConflictGroup, find_conflict
from roomhub.scheduling.errors import (
    CancelReasonRequired,
    InvalidDuration,
    SlotTaken,
    TransitionNotAllowed,
)
from roomhub.scheduling.status import CONFIRM_BLOCKING, TERMINAL_STATUSES, BookingStatus
from roomhub.scheduling.timeutils import duration_hours

COMMISSION_RATE = Decimal("0.10")
DEFAULT_CANCEL_REASON = "Cancelled by the organization"

_CENTS = Decimal("0.01")

ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {
            BookingStatus.CONFIRMED,
            BookingStatus.CANCELLED,
            BookingStatus.COMPLETED,
            BookingStatus.NO_SHOW,
        }
    ),
    BookingStatus.CONFIRMED: frozenset(
        {BookingStatus.CANCELLED, BookingStatus.COMPLETED, BookingStatus.NO_SHOW}
    ),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.NO_SHOW: frozenset(),
}


@dataclass(frozen=True)
class Quote:
    total_amount: Decimal
    commission: Decimal
    duration_hours: Decimal


def price(
    hourly_rate: Union[Decimal, int, float, str],
    start: str,
    end: str,
    commission_rate: Decimal = COMMISSION_RATE,
) -> Quote:
    """Amount the customer pays for ``[start, end)`` and the platform's cut of it.

    The commission is part of ``total_amount``, not added on top.
    """
    hours = duration_hours(start, end)
    if hours <= 0:
        raise InvalidDuration("Booking duration must be positive")
    rate = Decimal(str(hourly_rate))
    total = (rate * hours).quantize(_CENTS, rounding=ROUND_HALF_UP)
    commission = (total * commission_rate).quantize(_CENTS, rounding=ROUND_HALF_UP)
    return Quote(total_amount=total, commission=commission, duration_hours=hours)


def can_transition(current: Union[BookingStatus, str], target: Union[BookingStatus, str]) -> bool:
    current, target = BookingStatus(current), BookingStatus(target)
    return current == target or target in ALLOWED_TRANSITIONS[current]


def check_transition(
    current: Union[BookingStatus, str],
    target: Union[BookingStatus, str],
    *,
    booking_id: Optional[Any] = None,
    cancel_reason: Optional[str] = None,
) -> None:
    """Raise unless ``current -> target`` is allowed.

    Cancelling a CONFIRMED booking needs an explicit reason; a PENDING one
    falls back to ``DEFAULT_CANCEL_REASON``.
    """
    current, target = BookingStatus(current), BookingStatus(target)
    if not can_transition(current, target):
        raise TransitionNotAllowed(current.value, target.value, booking_id=booking_id)
    if (
        current == BookingStatus.CONFIRMED
        and target == BookingStatus.CANCELLED
        and not (cancel_reason or "").strip()
    ):
        raise CancelReasonRequired(
            "A reason is required to cancel a confirmed booking",
            booking_id=booking_id,
        )


def ensure_confirmable(booking: Any, others: Iterable[Any]) -> None:
    """Confirming is only blocked by another CONFIRMED booking on the slot."""
    blocker = find_conflict(
        others,
        booking.room_id,
        booking.date,
        booking.start_time,
        booking.end_time,
        exclude_id=booking.id,
        blocking_statuses=CONFIRM_BLOCKING,
    )
    if blocker is not None:
        raise SlotTaken(
            "Time slot is already booked by a confirmed reservation",
            booking_id=blocker.id,
        )


def transition(
    booking: Any,
    target: Union[BookingStatus, str],
    *,
    others: Iterable[Any] = (),
    cancel_reason: Optional[str] = None,
) -> Any:
    """Move ``booking`` to ``target`` in place once every check has passed."""
    current = BookingStatus(booking.status)
    target = BookingStatus(target)
    if current == target:
        return booking

    check_transition(current, target, booking_id=booking.id, cancel_reason=cancel_reason)
    if target == BookingStatus.CONFIRMED:
        ensure_confirmable(booking, others)

    booking.status = target.value
    if target == BookingStatus.CANCELLED:
        booking.cancel_reason = cancel_reason or DEFAULT_CANCEL_REASON
    return booking


def resolve_conflict_group(
    group: ConflictGroup,
    winner_id: Any,
    *,
    others: Iterable[Any] = (),
    cancel_reason: Optional[str] = None,
) -> tuple[Any, list[Any]]:
    """Confirm one member of ``group`` and cancel the rest.

    ``others`` are the remaining bookings of the same room and day outside the
    group; a confirmed one overlapping the winner blocks the resolution. All
    checks run before any member is touched. Losers are cancelled with
    ``cancel_reason`` or ``DEFAULT_CANCEL_REASON``, confirmed ones included.
    """
    winner = next((b for b in group.bookings if b.id == winner_id), None)
    if winner is None:
        raise ValueError(f"Booking {winner_id} is not part of this conflict group")

    check_transition(winner.status, BookingStatus.CONFIRMED, booking_id=winner.id)
    member_ids = set(group.booking_ids)
    outside = [b for b in others if b.id not in member_ids]
    ensure_confirmable(winner, outside)

    losers = []
    for booking in group.bookings:
        if booking.id == winner.id or BookingStatus(booking.status) in TERMINAL_STATUSES:
            continue
        transition(
            booking,
            BookingStatus.CANCELLED,
            cancel_reason=cancel_reason or DEFAULT_CANCEL_REASON,
        )
        losers.append(booking)

    transition(winner, BookingStatus.CONFIRMED, others=outside)
    return winner, losers
