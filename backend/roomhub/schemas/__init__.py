from .booking import (
    BookingCreate,
    BookingRead,
    BookingUpdate,
    ConflictGroupRead,
    RescheduleRequest,
    ResolveConflictRequest,
    ResolveConflictResponse,
    RoomDayAvailability,
    RoomTimetable,
    TimetableBooking,
    TimetableDay,
)
from .notification import NotificationRead
from .organization import (
    DayHours,
    OperatingHours,
    OrganizationCreate,
    OrganizationRead,
)
from .pagination import PaginatedResponse
from .room import RoomCreate, RoomRead, RoomUpdate
from .user import (
    AccessToken,
    UserBase,
    UserCreate,
    UserLogin,
    UserRead,
)

__all__ = [
    "AccessToken",
    "BookingCreate",
    "BookingRead",
    "BookingUpdate",
    "ConflictGroupRead",
    "DayHours",
    "NotificationRead",
    "OperatingHours",
    "OrganizationCreate",
    "OrganizationRead",
    "PaginatedResponse",
    "RescheduleRequest",
    "ResolveConflictRequest",
    "ResolveConflictResponse",
    "RoomCreate",
    "RoomDayAvailability",
    "RoomRead",
    "RoomTimetable",
    "RoomUpdate",
    "TimetableBooking",
    "TimetableDay",
    "UserBase",
    "UserCreate",
    "UserLogin",
    "UserRead",
]
