"""Database-backed booking operations.

Each write follows the same check-then-write shape: lock the room row, read
the bookings of that room and day, run the scheduling core, and only then
mutate and commit. Scheduling failures propagate as ``SchedulingError``
before anything is written.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Optional, Sequence
from uuid import UUID

from fastapi import HTTPException, status
from sqlmodel import Session, func, or_, select

from roomhub.core.config import settings
from roomhub.models import Booking, Notification, Room, User
from roomhub.scheduling import (
    CREATION_BLOCKING,
    BookingStatus,
    ConflictGroup,
    PaymentStatus,
    SlotTaken,
    check_transition,
    find_conflict,
    group_conflicts,
    plan_reschedule,
    price,
    resolve_conflict_group,
    transition,
    validate_window,
)
from roomhub.scheduling.lifecycle import ensure_confirmable
from roomhub.schemas import BookingCreate, BookingUpdate, RescheduleRequest
from roomhub.services.hours import get_organization_hours
from roomhub.services.notifications import notify_booking_rescheduled, notify_status_change
from roomhub.services.permissions import (
    ensure_booking_access,
    is_admin,
    is_organization_staff,
    member_organization_ids,
)

logger = logging.getLogger(__name__)


def _get_room_for_update(session: Session, room_id: UUID) -> Room:
    """Load and lock the room so writers on the same room run one at a time."""
    room = session.exec(select(Room).where(Room.id == room_id).with_for_update()).one_or_none()
    if not room:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Room not found")
    return room


def _lock_booking_room(session: Session, booking: Booking) -> Room:
    """Lock the booking's room, then reload the booking under that lock.

    ``booking`` usually comes from the identity map, loaded before the lock was
    taken, so its status and slot may be stale.
    """
    room = _get_room_for_update(session, booking.room_id)
    session.refresh(booking)
    return room


def get_booking_or_404(session: Session, booking_id: UUID) -> Booking:
    booking = session.get(Booking, booking_id)
    if not booking:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Booking not found")
    return booking


def bookings_for_room_day(session: Session, room_id: UUID, day: date) -> list[Booking]:
    statement = (
        select(Booking)
        .where(Booking.room_id == room_id, Booking.date == day)
        .order_by(Booking.start_time)
        .execution_options(populate_existing=True)
    )
    return list(session.exec(statement).all())


def active_bookings_condition(now: Optional[datetime] = None):
    """Bookings shown on scheduling views.

    Cancelled bookings linger for ``CANCELLED_VISIBILITY_MINUTES`` after their
    last update and then drop out of view; nothing is deleted.
    """
    now = now or datetime.utcnow()
    cutoff = now - timedelta(minutes=settings.CANCELLED_VISIBILITY_MINUTES)
    return or_(
        Booking.status != BookingStatus.CANCELLED.value,
        Booking.updated_at >= cutoff,
    )


def active_bookings_for_room(
    session: Session,
    room_id: UUID,
    date_from: date,
    date_to: date,
    now: Optional[datetime] = None,
) -> list[Booking]:
    statement = (
        select(Booking)
        .where(
            Booking.room_id == room_id,
            Booking.date >= date_from,
            Booking.date <= date_to,
            active_bookings_condition(now),
        )
        .order_by(Booking.date, Booking.start_time)
    )
    return list(session.exec(statement).all())


def create_booking(session: Session, user: User, payload: BookingCreate) -> Booking:
    room = _get_room_for_update(session, payload.room_id)
    if not room.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Room is not active")
    if room.organization_id != payload.organization_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Room does not belong to the specified organization",
        )

    hours = get_organization_hours(session, room.organization_id)
    validate_window(hours, payload.date, payload.start_time, payload.end_time)

    existing = bookings_for_room_day(session, room.id, payload.date)
    blocker = find_conflict(
        existing,
        room.id,
        payload.date,
        payload.start_time,
        payload.end_time,
        blocking_statuses=CREATION_BLOCKING,
    )
    if blocker is not None:
        logger.warning(
            "Rejected booking on room %s %s %s-%s: overlaps %s",
            room.id,
            payload.date,
            payload.start_time,
            payload.end_time,
            blocker.id,
        )
        raise SlotTaken("Time slot is already booked", booking_id=blocker.id)

    quote = price(room.hourly_rate, payload.start_time, payload.end_time)
    booking = Booking(
        organization_id=room.organization_id,
        room_id=room.id,
        user_id=user.id,
        date=payload.date,
        start_time=payload.start_time,
        end_time=payload.end_time,
        status=BookingStatus.PENDING.value,
        total_amount=quote.total_amount,
        commission=quote.commission,
        payment_status=PaymentStatus.PENDING.value,
        payment_method=payload.payment_method.value if payload.payment_method else None,
        notes=payload.notes,
    )
    session.add(booking)
    session.commit()
    session.refresh(booking)
    logger.info("Created booking %s on room %s for user %s", booking.id, room.id, user.id)
    return booking


def update_booking(
    session: Session,
    user: User,
    booking: Booking,
    payload: BookingUpdate,
) -> Booking:
    """Apply a status, time, payment or notes change.

    Time changes follow the reschedule rules (only CONFIRMED bookings block);
    a status change to CONFIRMED is gated on the same check. Every check runs
    before the booking is modified.
    """
    room = _lock_booking_room(session, booking)
    ensure_booking_access(session, user, booking)
    is_staff = is_organization_staff(session, user, booking.organization_id)

    target = payload.status
    if target is not None and target.value != booking.status and not is_staff:
        if target != BookingStatus.CANCELLED:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Only center owners and admins can change booking status",
            )
    if (payload.payment_method or payload.payment_status) and not is_staff:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only center owners and admins can change payment details",
        )

    new_date = payload.date or booking.date
    others = bookings_for_room_day(session, room.id, new_date)

    plan = None
    time_changed = any(v is not None for v in (payload.date, payload.start_time, payload.end_time))
    if time_changed:
        hours = get_organization_hours(session, room.organization_id)
        plan = plan_reschedule(
            booking,
            hours,
            others,
            new_date,
            payload.start_time or booking.start_time,
            payload.end_time or booking.end_time,
            hourly_rate=room.hourly_rate,
        )

    if target is not None and target.value != booking.status:
        check_transition(
            booking.status,
            target,
            booking_id=booking.id,
            cancel_reason=payload.cancel_reason,
        )
        if target == BookingStatus.CONFIRMED and plan is None:
            ensure_confirmable(booking, others)

    previous_status = booking.status
    if plan is not None:
        plan.apply(booking)
    if target is not None:
        transition(booking, target, others=others, cancel_reason=payload.cancel_reason)
    if payload.payment_method is not None:
        booking.payment_method = payload.payment_method.value
    if payload.payment_status is not None:
        booking.payment_status = payload.payment_status.value
    if payload.notes is not None:
        booking.notes = payload.notes

    booking.touch()
    session.add(booking)
    if booking.user_id != user.id:
        notify_status_change(session, booking, previous_status)
        if plan is not None:
            notify_booking_rescheduled(session, booking)
    session.commit()
    session.refresh(booking)
    logger.info(
        "Updated booking %s by %s: status %s -> %s%s",
        booking.id,
        user.id,
        previous_status,
        booking.status,
        f", moved to {booking.date} {booking.start_time}-{booking.end_time}" if plan else "",
    )
    return booking


def reschedule_booking(
    session: Session,
    user: User,
    booking: Booking,
    payload: RescheduleRequest,
) -> Booking:
    """Commit a drag-and-drop move on the owner's timetable."""
    room = _lock_booking_room(session, booking)
    ensure_booking_access(session, user, booking)
    hours = get_organization_hours(session, room.organization_id)
    others = bookings_for_room_day(session, room.id, payload.date)

    plan = plan_reschedule(
        booking,
        hours,
        others,
        payload.date,
        payload.start_time,
        payload.end_time,
        hourly_rate=room.hourly_rate,
    )
    plan.apply(booking)
    booking.touch()
    session.add(booking)
    if booking.user_id != user.id:
        notify_booking_rescheduled(session, booking)
    session.commit()
    session.refresh(booking)
    logger.info(
        "Rescheduled booking %s to %s %s-%s",
        booking.id,
        booking.date,
        booking.start_time,
        booking.end_time,
    )
    return booking


def delete_booking(session: Session, user: User, booking: Booking) -> None:
    _lock_booking_room(session, booking)
    ensure_booking_access(session, user, booking)
    if booking.user_id != user.id and not is_admin(user):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only the booking owner or an admin can delete a booking",
        )
    if booking.status == BookingStatus.COMPLETED.value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete completed booking",
        )
    if booking.payment_status == PaymentStatus.PAID.value:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete paid booking. Please process refund first.",
        )
    for notification in session.exec(
        select(Notification).where(Notification.booking_id == booking.id)
    ).all():
        notification.booking_id = None
        session.add(notification)
    session.delete(booking)
    session.commit()
    logger.info("Deleted booking %s by %s", booking.id, user.id)


def list_bookings(
    session: Session,
    user: User,
    *,
    organization_id: Optional[UUID] = None,
    room_id: Optional[UUID] = None,
    statuses: Sequence[BookingStatus] = (),
    payment_status: Optional[PaymentStatus] = None,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    page: int = 1,
    page_size: int = 10,
) -> tuple[list[Booking], int]:
    """Bookings visible to ``user``, newest first, with the unpaginated total."""
    conditions = []
    if not is_admin(user):
        if user.role in ("TEACHER", "PARTNER"):
            conditions.append(Booking.user_id == user.id)
        else:
            conditions.append(Booking.organization_id.in_(member_organization_ids(session, user)))

    if organization_id:
        if not is_organization_staff(session, user, organization_id) and user.role not in ("TEACHER", "PARTNER"):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
        conditions.append(Booking.organization_id == organization_id)
    if room_id:
        conditions.append(Booking.room_id == room_id)
    if statuses:
        conditions.append(Booking.status.in_([s.value for s in statuses]))
    if payment_status:
        conditions.append(Booking.payment_status == payment_status.value)
    if date_from:
        conditions.append(Booking.date >= date_from)
    if date_to:
        conditions.append(Booking.date <= date_to)

    total = session.exec(select(func.count()).select_from(Booking).where(*conditions)).one()
    statement = (
        select(Booking)
        .where(*conditions)
        .order_by(Booking.created_at.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
    )
    return list(session.exec(statement).all()), total


def conflict_groups_for_room(
    session: Session,
    room_id: UUID,
    date_from: date,
    date_to: date,
) -> list[ConflictGroup]:
    return group_conflicts(active_bookings_for_room(session, room_id, date_from, date_to))


def resolve_conflict(
    session: Session,
    user: User,
    room_id: UUID,
    day: date,
    winner_id: UUID,
    cancel_reason: Optional[str] = None,
) -> tuple[Booking, list[Booking]]:
    """Confirm ``winner_id`` and cancel the other members of its conflict group."""
    room = _get_room_for_update(session, room_id)
    if not is_organization_staff(session, user, room.organization_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access to organization denied")

    day_bookings = bookings_for_room_day(session, room.id, day)
    group = next(
        (g for g in group_conflicts(day_bookings) if winner_id in g.booking_ids),
        None,
    )
    if group is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Booking is not part of a conflict on this day",
        )

    previous = {b.id: b.status for b in group.bookings}
    winner, losers = resolve_conflict_group(
        group,
        winner_id,
        others=day_bookings,
        cancel_reason=cancel_reason,
    )
    for booking in [winner, *losers]:
        booking.touch()
        session.add(booking)
        notify_status_change(session, booking, previous[booking.id])
    session.commit()
    for booking in [winner, *losers]:
        session.refresh(booking)
    logger.info(
        "Resolved conflict on room %s %s: confirmed %s, cancelled %s",
        room.id,
        day,
        winner.id,
        [b.id for b in losers],
    )
    return winner, losers
