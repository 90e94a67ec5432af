from __future__ import annotations

from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"
    NO_SHOW = "NO_SHOW"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"
    PARTIAL_REFUND = "PARTIAL_REFUND"


class PaymentMethod(str, Enum):
    KONNECT = "KONNECT"
    CLICKTOPAY = "CLICKTOPAY"
    ON_SITE = "ON_SITE"
    BANK_TRANSFER = "BANK_TRANSFER"


TERMINAL_STATUSES = frozenset(
    {BookingStatus.CANCELLED, BookingStatus.COMPLETED, BookingStatus.NO_SHOW}
)

# Statuses that block a new reservation on the same slot.
CREATION_BLOCKING = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})

# Confirming or moving a booking is only blocked by confirmed bookings.
CONFIRM_BLOCKING = frozenset({BookingStatus.CONFIRMED})
