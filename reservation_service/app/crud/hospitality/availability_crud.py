from datetime import date
from typing import Iterable, List

from sqlalchemy.orm import Session

from ...enum.hospitality_enum import ACTIVE_BOOKING_STATUSES
from ...models.hospitality.bookings import Booking
from ...models.hospitality.booking_rooms import BookingRoom
from ...models.hospitality.rooms import Room
from ...services import availability_service

ACTIVE_STATUS_VALUES = [status.value for status in ACTIVE_BOOKING_STATUSES]


def get_all_rooms(db: Session) -> List[Room]:
    return db.query(Room).order_by(Room.floor.asc(), Room.position.asc()).all()


def get_overlapping_bookings(db: Session, check_in: date, check_out: date) -> List[Booking]:
    return (
        db.query(Booking)
        .filter(
            Booking.status.in_(ACTIVE_STATUS_VALUES),
            Booking.check_in < check_out,
            Booking.check_out > check_in
        )
        .all()
    )


def resolve_free_rooms(db: Session, check_in: date, check_out: date) -> List[Room]:
    """Fresh read of the booking table; callers must not hold on to the result across requests."""
    availability_service.validate_date_range(check_in, check_out)
    return availability_service.free_rooms(
        get_all_rooms(db),
        get_overlapping_bookings(db, check_in, check_out),
        check_in,
        check_out
    )


def find_claimed_rooms(db: Session, room_numbers: Iterable[int], check_in: date, check_out: date) -> List[int]:
    """Room numbers out of `room_numbers` held by an active booking overlapping the range."""
    query = (
        db.query(BookingRoom.room_number)
        .join(Booking, BookingRoom.booking_id == Booking.id)
        .filter(
            BookingRoom.room_number.in_(list(room_numbers)),
            BookingRoom.check_in < check_out,
            BookingRoom.check_out > check_in,
            Booking.status.in_(ACTIVE_STATUS_VALUES)
        )
    )
    return sorted({row.room_number for row in query.distinct().all()})
