from __future__ import annotations

import logging
from uuid import UUID

from sqlmodel import Session

from roomhub.models import Booking, Notification

logger = logging.getLogger(__name__)


def create_notification(
    session: Session,
    user_id: UUID,
    type: str,
    title: str,
    message: str,
    booking_id: UUID | None = None,
) -> Notification:
    """Create a notification for a user."""
    notification = Notification(
        user_id=user_id,
        booking_id=booking_id,
        type=type,
        title=title,
        message=message,
    )
    session.add(notification)
    return notification


def _slot_label(booking: Booking) -> str:
    return f"{booking.date.isoformat()} {booking.start_time}-{booking.end_time}"


def notify_booking_confirmed(session: Session, booking: Booking) -> None:
    create_notification(
        session=session,
        user_id=booking.user_id,
        type="booking_confirmed",
        title="Booking confirmed",
        message=f"Your booking on {_slot_label(booking)} has been confirmed",
        booking_id=booking.id,
    )
    logger.debug("Queued confirmation notification for booking %s", booking.id)


def notify_booking_cancelled(session: Session, booking: Booking) -> None:
    reason = f": {booking.cancel_reason}" if booking.cancel_reason else ""
    create_notification(
        session=session,
        user_id=booking.user_id,
        type="booking_cancelled",
        title="Booking cancelled",
        message=f"Your booking on {_slot_label(booking)} has been cancelled{reason}",
        booking_id=booking.id,
    )


def notify_booking_rescheduled(session: Session, booking: Booking) -> None:
    create_notification(
        session=session,
        user_id=booking.user_id,
        type="booking_rescheduled",
        title="Booking moved",
        message=f"Your booking has been moved to {_slot_label(booking)}",
        booking_id=booking.id,
    )


def notify_status_change(session: Session, booking: Booking, previous_status: str) -> None:
    """Send the notification matching the booking's new status, if any."""
    if booking.status == previous_status:
        return
    if booking.status == "CONFIRMED":
        notify_booking_confirmed(session, booking)
    elif booking.status == "CANCELLED":
        notify_booking_cancelled(session, booking)
