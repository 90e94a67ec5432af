from .booking import Booking
from .notification import Notification
from .organization import Organization
from .organization_member import OrganizationMember
from .room import Room
from .user import User

__all__ = [
    "Booking",
    "Notification",
    "Organization",
    "OrganizationMember",
    "Room",
    "User",
]
