from enum import Enum


class BookingStatus(str, Enum):

    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"


# Statuses that still hold their rooms for the booked dates
ACTIVE_BOOKING_STATUSES = (BookingStatus.pending, BookingStatus.confirmed)


class PaymentStatus(str, Enum):

    pending = "pending"
    paid = "paid"
    refunded = "refunded"


class RoomType(str, Enum):

    standard = "standard"
    deluxe = "deluxe"
    suite = "suite"


class AllocationStrategy(str, Enum):

    same_floor = "same_floor"
    across_floors = "across_floors"
