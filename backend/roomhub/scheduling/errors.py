"""Typed failures raised by the scheduling core.

Every failure here is a recoverable, user-facing validation outcome. The API
layer renders them as 4xx responses carrying ``kind`` and, where relevant,
the id of the offending booking.
"""

from __future__ import annotations

from typing import Any, Optional


class SchedulingError(Exception):
    kind: str = "scheduling_error"
    status_code: int = 400

    def __init__(self, message: str, *, booking_id: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.booking_id = booking_id

    def to_dict(self) -> dict[str, Any]:
        return {
            "detail": self.message,
            "kind": self.kind,
            "booking_id": str(self.booking_id) if self.booking_id is not None else None,
        }


class InvalidRange(SchedulingError):
    kind = "invalid_range"


class ClosedDay(SchedulingError):
    kind = "closed_day"


class OutOfHours(SchedulingError):
    kind = "out_of_hours"

    def __init__(self, open_time: str, close_time: str) -> None:
        super().__init__(f"Booking must be between {open_time} and {close_time}")
        self.open_time = open_time
        self.close_time = close_time


class SlotTaken(SchedulingError):
    kind = "slot_taken"
    status_code = 409


class InvalidDuration(SchedulingError):
    kind = "invalid_duration"


class CancelReasonRequired(SchedulingError):
    kind = "cancel_reason_required"


class TransitionNotAllowed(SchedulingError):
    kind = "transition_not_allowed"
    status_code = 409

    def __init__(self, current: str, target: str, *, booking_id: Optional[Any] = None) -> None:
        super().__init__(
            f"Cannot change booking status from {current} to {target}",
            booking_id=booking_id,
        )
        self.current = current
        self.target = target


__all__ = [
    "CancelReasonRequired",
    "ClosedDay",
    "InvalidDuration",
    "InvalidRange",
    "OutOfHours",
    "SchedulingError",
    "SlotTaken",
    "TransitionNotAllowed",
]
