"""Domain Enums"""
from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"

    def can_transition_to(self, new_status: "BookingStatus") -> bool:
        """Check the transition table"""
        return new_status in _BOOKING_TRANSITIONS[self]

    @property
    def is_active(self) -> bool:
        return self in (BookingStatus.PENDING, BookingStatus.CONFIRMED)

    @property
    def is_final(self) -> bool:
        return self in (BookingStatus.CANCELLED, BookingStatus.COMPLETED)


_BOOKING_TRANSITIONS = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
}


class SpotStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    OCCUPIED = "OCCUPIED"
    RESERVED = "RESERVED"
    MAINTENANCE = "MAINTENANCE"


class DiscountType(str, Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED = "FIXED"


class AccommodationCategory(str, Enum):
    CABIN = "CABIN"
    TENT_SITE = "TENT_SITE"
    RV_SPOT = "RV_SPOT"
    GLAMPING = "GLAMPING"
