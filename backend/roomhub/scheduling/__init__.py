from .availability import DayWindow, is_open_on, timetable_range, validate_window
from .conflicts import ConflictGroup, conflicted_ids, find_conflict, group_conflicts, intervals_overlap
from .errors import (
    CancelReasonRequired,
    ClosedDay,
    InvalidDuration,
    InvalidRange,
    OutOfHours,
    SchedulingError,
    SlotTaken,
    TransitionNotAllowed,
)
from .lifecycle import (
    ALLOWED_TRANSITIONS,
    COMMISSION_RATE,
    Quote,
    can_transition,
    check_transition,
    price,
    resolve_conflict_group,
    transition,
)
from .reschedule import ReschedulePlan, plan_reschedule, reschedule
from .status import (
    CONFIRM_BLOCKING,
    CREATION_BLOCKING,
    TERMINAL_STATUSES,
    BookingStatus,
    PaymentMethod,
    PaymentStatus,
)

__all__ = [
    "ALLOWED_TRANSITIONS",
    "BookingStatus",
    "COMMISSION_RATE",
    "CancelReasonRequired",
    "CONFIRM_BLOCKING",
    "CREATION_BLOCKING",
    "ClosedDay",
    "ConflictGroup",
    "DayWindow",
    "InvalidDuration",
    "InvalidRange",
    "OutOfHours",
    "PaymentMethod",
    "PaymentStatus",
    "Quote",
    "ReschedulePlan",
    "SchedulingError",
    "SlotTaken",
    "TERMINAL_STATUSES",
    "TransitionNotAllowed",
    "can_transition",
    "check_transition",
    "conflicted_ids",
    "find_conflict",
    "group_conflicts",
    "intervals_overlap",
    "is_open_on",
    "plan_reschedule",
    "price",
    "reschedule",
    "resolve_conflict_group",
    "timetable_range",
    "transition",
    "validate_window",
]
