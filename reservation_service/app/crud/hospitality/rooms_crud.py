import logging
import random
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import availability_crud, bookings_crud
from ...core.exceptions import BookingConflict, BookingSystemError
from ...core.room_locks import RoomLockTimeout, room_locks
from ...enum.hospitality_enum import ACTIVE_BOOKING_STATUSES, BookingStatus, PaymentStatus
from ...models.hospitality.booking_rooms import BookingRoom
from ...models.hospitality.bookings import Booking
from ...models.hospitality.rooms import Room
from ...schemas.hospitality.rooms_schemas import (
    AvailabilityOut, FloorAvailability, OccupancyOut, QuoteOut, ResetOut, RoomSearchRequest,
    RoomTypeSummary
)
from ...services import availability_service, inventory_service, pricing_service
from ...services.room_selection_service import MAX_ROOMS_PER_BOOKING, select_rooms
from ...services.travel_time_service import calculate_travel_time
from fastapi import HTTPException, status

logger = logging.getLogger(__name__)

OCCUPANCY_USER_ID = "occupancy-simulator"
MIN_OCCUPANCY = 0.3
MAX_OCCUPANCY = 0.6


# ----------------- Provisioning -----------------
def provision_rooms(db: Session) -> int:
    """Create whatever part of the 97-room grid is missing. Existing rooms are left as they are."""
    existing = {number for (number,) in db.query(Room.room_number).all()}
    missing = [
        Room(**attrs) for attrs in inventory_service.build_inventory()
        if attrs["room_number"] not in existing
    ]
    if missing:
        db.add_all(missing)
        db.commit()
        logger.info("Provisioned %s rooms", len(missing))
    return len(missing)


# ----------------- Queries -----------------
def get_rooms(db: Session) -> List[Room]:
    return availability_crud.get_all_rooms(db)


def get_rooms_by_floor(db: Session, floor: int) -> List[Room]:
    rooms = (
        db.query(Room)
        .filter(Room.floor == floor)
        .order_by(Room.position.asc())
        .all()
    )
    if not rooms:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No rooms found on floor {floor}"
        )
    return rooms


def get_room_by_number(db: Session, room_number: int) -> Room:
    room = db.query(Room).filter(Room.room_number == room_number).first()
    if not room:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Room {room_number} not found"
        )
    return room


def search_rooms(db: Session, params: RoomSearchRequest) -> List[Room]:
    filters = []
    if params.floor is not None:
        filters.append(Room.floor == params.floor)
    if params.room_type and params.room_type.lower() != "all":
        filters.append(func.lower(Room.room_type) == params.room_type.lower())
    if params.min_price is not None:
        filters.append(Room.base_price >= params.min_price)
    if params.max_price is not None:
        filters.append(Room.base_price <= params.max_price)

    return (
        db.query(Room)
        .filter(*filters)
        .order_by(Room.floor.asc(), Room.position.asc())
        .all()
    )


def room_type_summary(db: Session, check_in: Optional[date] = None, check_out: Optional[date] = None) -> List[RoomTypeSummary]:
    rows = (
        db.query(
            Room.room_type,
            func.count(Room.id).label("count"),
            func.avg(Room.base_price).label("avg_price")
        )
        .group_by(Room.room_type)
        .order_by(Room.room_type.asc())
        .all()
    )

    free_by_type = None
    if check_in and check_out:
        free_by_type = {}
        for room in availability_crud.resolve_free_rooms(db, check_in, check_out):
            free_by_type[room.room_type] = free_by_type.get(room.room_type, 0) + 1

    return [
        RoomTypeSummary(
            room_type=row.room_type,
            count=int(row.count),
            avg_price=round(float(row.avg_price or 0), 2),
            available=None if free_by_type is None else free_by_type.get(row.room_type, 0)
        )
        for row in rows
    ]


def get_availability(db: Session, check_in: date, check_out: date) -> AvailabilityOut:
    free = availability_crud.resolve_free_rooms(db, check_in, check_out)
    floors = availability_service.group_by_floor(free)
    return AvailabilityOut(
        check_in=check_in,
        check_out=check_out,
        total_free=len(free),
        floors=[
            FloorAvailability(
                floor=floor,
                rooms=[room.room_number for room in floor_rooms],
                free=len(floor_rooms)
            )
            for floor, floor_rooms in enumerate(floors)
            if floor_rooms
        ]
    )


def quote_rooms(db: Session, num_rooms: int, check_in: date, check_out: date) -> QuoteOut:
    """What a booking for these dates would get right now, without reserving anything."""
    nights = bookings_crud.validate_booking_request(num_rooms, check_in, check_out)
    free = availability_crud.resolve_free_rooms(db, check_in, check_out)
    selection = select_rooms(availability_service.group_by_floor(free), num_rooms)
    return QuoteOut(
        rooms=selection.room_numbers,
        floors=selection.floors,
        travel_time=selection.travel_time,
        strategy=selection.strategy.value,
        nights=nights,
        total_price=float(pricing_service.calculate_total_price(
            selection.rooms, check_in, check_out))
    )


# ----------------- Occupancy simulation -----------------
def _occupancy_booking(rooms: List[Room], check_in: date, check_out: date) -> Booking:
    booking = Booking(
        user_id=OCCUPANCY_USER_ID,
        rooms=[room.room_number for room in rooms],
        total_rooms=len(rooms),
        travel_time=calculate_travel_time(rooms),
        total_price=pricing_service.calculate_total_price(rooms, check_in, check_out),
        check_in=check_in,
        check_out=check_out,
        status=BookingStatus.confirmed.value,
        payment_status=PaymentStatus.pending.value
    )
    for room in rooms:
        booking.booking_rooms.append(BookingRoom(
            room_number=room.room_number,
            check_in=check_in,
            check_out=check_out,
            price_per_night=pricing_service.nightly_rate(
                room, check_in).quantize(pricing_service.CENTS)
        ))
    return booking


def generate_random_occupancy(db: Session, check_in: date, check_out: date,
                              rng: Optional[random.Random] = None) -> OccupancyOut:
    """
    Book a random 30-60% of the hotel for the range, as confirmed bookings of up
    to five rooms each. Rooms already held for the range are never double booked,
    so a busy hotel ends up with fewer new bookings than the drawn rate.
    """
    availability_service.validate_date_range(check_in, check_out)
    rng = rng or random.Random()

    total_rooms = len(availability_crud.get_all_rooms(db))
    rate = MIN_OCCUPANCY + rng.random() * (MAX_OCCUPANCY - MIN_OCCUPANCY)
    wanted = int(total_rooms * rate)

    free = availability_crud.resolve_free_rooms(db, check_in, check_out)
    picked = rng.sample(free, min(wanted, len(free)))
    picked.sort(key=lambda room: (room.floor, room.position))
    room_numbers = [room.room_number for room in picked]

    bookings_created = 0
    try:
        with room_locks.hold(db, room_numbers):
            claimed = set(availability_crud.find_claimed_rooms(
                db, room_numbers, check_in, check_out))
            picked = [room for room in picked if room.room_number not in claimed]
            for start in range(0, len(picked), MAX_ROOMS_PER_BOOKING):
                db.add(_occupancy_booking(
                    picked[start:start + MAX_ROOMS_PER_BOOKING], check_in, check_out))
                bookings_created += 1
            db.commit()
    except RoomLockTimeout as exc:
        db.rollback()
        raise BookingConflict(str(exc)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Persistence failure while generating occupancy")
        raise BookingSystemError("Occupancy could not be saved") from exc

    logger.info("Random occupancy %s -> %s: %s rooms in %s bookings (rate %.1f%%)",
                check_in, check_out, len(picked), bookings_created, rate * 100)
    return OccupancyOut(
        check_in=check_in,
        check_out=check_out,
        total_rooms=total_rooms,
        occupied_rooms=len(picked),
        available_rooms=len(free) - len(room_numbers),
        bookings_created=bookings_created,
        occupancy_rate=round(rate * 100, 1)
    )


# ----------------- Reset -----------------
def reset_all_bookings(db: Session) -> ResetOut:
    """Cancel every active booking in one update, then top the inventory back up to 97 rooms."""
    now = datetime.now(timezone.utc)
    active = [s.value for s in ACTIVE_BOOKING_STATUSES]
    try:
        cancelled = (
            db.query(Booking)
            .filter(Booking.status.in_(active))
            .update({
                Booking.status: BookingStatus.cancelled.value,
                Booking.cancelled_at: now,
                Booking.updated_at: now
            }, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Persistence failure while resetting bookings")
        raise BookingSystemError("Bookings could not be reset") from exc

    provisioned = provision_rooms(db)
    total_rooms = db.query(Room).count()
    logger.warning("All bookings reset: %s cancelled, %s rooms provisioned",
                   cancelled, provisioned)
    return ResetOut(
        cancelled_bookings=cancelled,
        provisioned_rooms=provisioned,
        total_rooms=total_rooms
    )
