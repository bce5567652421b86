import logging
import time
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import availability_crud
from ...core.exceptions import (
    BookingConflict, BookingNotCancellable, BookingNotFound, BookingSystemError,
    InvalidBookingRequest
)
from ...core.room_locks import RoomLockTimeout, room_locks
from ...enum.hospitality_enum import ACTIVE_BOOKING_STATUSES, BookingStatus, PaymentStatus
from ...models.hospitality.booking_rooms import BookingRoom
from ...models.hospitality.bookings import Booking
from ...schemas.hospitality.bookings_schemas import (
    BookingCreateOut, BookingListResponse, BookingOut, BookingRequest, BookingStats
)
from ...services import availability_service, pricing_service
from ...services.inventory_service import floor_position_for
from ...services.room_selection_service import RoomSelection, select_rooms
from shared.core.config import settings
from shared.core.schemas import Lookup

logger = logging.getLogger(__name__)

ACTIVE_STATUS_VALUES = [s.value for s in ACTIVE_BOOKING_STATUSES]


class RoomsAlreadyClaimed(Exception):
    """Raised inside the commit step when the chosen rooms were taken since Resolving."""

    def __init__(self, room_numbers: List[int]):
        super().__init__(f"Rooms {room_numbers} were booked by another request")
        self.room_numbers = room_numbers


# ----------------- Validation -----------------
def validate_booking_request(num_rooms: int, check_in: date, check_out: date, today: Optional[date] = None) -> int:
    today = today or date.today()

    if num_rooms is None or not 1 <= num_rooms <= settings.MAX_ROOMS_PER_BOOKING:
        raise InvalidBookingRequest(
            f"Number of rooms must be between 1 and {settings.MAX_ROOMS_PER_BOOKING}")

    if check_in < today:
        raise InvalidBookingRequest("Check-in date cannot be in the past")

    availability_service.validate_date_range(check_in, check_out)

    nights = pricing_service.count_nights(check_in, check_out)
    if nights > settings.MAX_STAY_NIGHTS:
        raise InvalidBookingRequest(
            f"Maximum stay is {settings.MAX_STAY_NIGHTS} nights")
    return nights


# ----------------- Commit -----------------
def _commit_allocation(db: Session, user_id: str, selection: RoomSelection, total_price: Decimal,
                       check_in: date, check_out: date) -> Booking:
    room_numbers = selection.room_numbers
    with room_locks.hold(db, room_numbers):
        claimed = availability_crud.find_claimed_rooms(
            db, room_numbers, check_in, check_out)
        if claimed:
            db.rollback()
            raise RoomsAlreadyClaimed(claimed)

        booking = Booking(
            user_id=user_id,
            rooms=room_numbers,
            total_rooms=len(room_numbers),
            travel_time=selection.travel_time,
            total_price=total_price,
            allocation_strategy=selection.strategy.value,
            check_in=check_in,
            check_out=check_out,
            status=BookingStatus.confirmed.value,
            payment_status=PaymentStatus.pending.value
        )
        for room in selection.rooms:
            booking.booking_rooms.append(BookingRoom(
                room_number=room.room_number,
                check_in=check_in,
                check_out=check_out,
                price_per_night=pricing_service.nightly_rate(
                    room, check_in).quantize(pricing_service.CENTS)
            ))
        db.add(booking)
        db.commit()

    db.refresh(booking)
    return booking


# ----------------- Create Booking -----------------
def create_booking(db: Session, user_id: str, num_rooms: int, check_in: date, check_out: date,
                   today: Optional[date] = None) -> Booking:
    """
    Validating -> Resolving -> Selecting -> Pricing -> Committing.

    Resolving through Committing repeats when another request claims the chosen
    rooms first, up to COMMIT_MAX_ATTEMPTS times, then BookingConflict is raised.
    InsufficientRooms from Selecting is returned to the caller as is.
    """
    validate_booking_request(num_rooms, check_in, check_out, today)
    logger.info("Booking attempt by user %s: %s rooms %s -> %s",
                user_id, num_rooms, check_in, check_out)

    attempts = settings.COMMIT_MAX_ATTEMPTS
    for attempt in range(attempts):
        try:
            # drop anything read by a previous attempt
            db.rollback()
            free = availability_crud.resolve_free_rooms(db, check_in, check_out)
            selection = select_rooms(
                availability_service.group_by_floor(free), num_rooms)
            total_price = pricing_service.calculate_total_price(
                selection.rooms, check_in, check_out)
            logger.info("Selected rooms %s (%s, %s min) for user %s",
                        selection.room_numbers, selection.strategy.value, selection.travel_time, user_id)

            booking = _commit_allocation(
                db, user_id, selection, total_price, check_in, check_out)
            logger.info("Booking %s created for user %s: rooms %s, total %s",
                        booking.id, user_id, booking.rooms, booking.total_price)
            return booking
        except (RoomsAlreadyClaimed, RoomLockTimeout) as exc:
            db.rollback()
            logger.warning("Commit attempt %s/%s for user %s lost the race: %s",
                           attempt + 1, attempts, user_id, exc)
            if attempt + 1 < attempts:
                time.sleep(settings.COMMIT_BACKOFF_SECONDS * (2 ** attempt))
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Persistence failure while booking for user %s", user_id)
            raise BookingSystemError("Booking could not be saved") from exc

    logger.error("Giving up on booking for user %s after %s attempts", user_id, attempts)
    raise BookingConflict(
        "The selected rooms were booked by another request. Please try again.")


def booking_create_out(booking: Booking) -> BookingCreateOut:
    return BookingCreateOut(
        booking_id=booking.id,
        rooms=booking.rooms,
        floors=sorted({floor_position_for(number)[0] for number in booking.rooms}),
        travel_time=booking.travel_time,
        total_price=float(booking.total_price),
        status=booking.status,
        strategy=booking.allocation_strategy,
        check_in=booking.check_in,
        check_out=booking.check_out,
        nights=booking.nights
    )


def booking_out(booking: Booking) -> BookingOut:
    return BookingOut(
        booking_id=booking.id,
        user_id=booking.user_id,
        rooms=booking.rooms,
        total_rooms=booking.total_rooms,
        travel_time=booking.travel_time,
        total_price=float(booking.total_price),
        allocation_strategy=booking.allocation_strategy,
        check_in=booking.check_in,
        check_out=booking.check_out,
        nights=booking.nights,
        status=booking.status,
        payment_status=booking.payment_status,
        booking_date=booking.booking_date,
        created_at=booking.created_at,
        cancelled_at=booking.cancelled_at
    )


# ----------------- Get Single Booking -----------------
def get_booking(db: Session, booking_id: UUID, user_id: str) -> Booking:
    booking = db.query(Booking).filter(
        Booking.id == booking_id,
        Booking.user_id == user_id
    ).first()
    if not booking:
        raise BookingNotFound()
    return booking


# ----------------- Get User Bookings -----------------
def get_bookings(db: Session, user_id: str, params: BookingRequest) -> BookingListResponse:
    filters = [Booking.user_id == user_id]
    if params.status and params.status.lower() != "all":
        filters.append(func.lower(Booking.status) == params.status.lower())

    base_query = db.query(Booking).filter(*filters)
    total = base_query.with_entities(func.count(Booking.id)).scalar()

    bookings = (
        base_query
        .order_by(Booking.created_at.desc(), Booking.check_in.desc())
        .offset(params.skip or 0)
        .limit(params.limit)
        .all()
    )
    return BookingListResponse(
        bookings=[booking_out(b) for b in bookings],
        total=total
    )


# ----------------- Cancel Booking -----------------
def cancel_booking(db: Session, booking_id: UUID, user_id: str, today: Optional[date] = None) -> Booking:
    today = today or date.today()
    booking = get_booking(db, booking_id, user_id)

    if booking.status == BookingStatus.cancelled.value:
        raise BookingNotCancellable("Booking is already cancelled")
    if booking.status not in ACTIVE_STATUS_VALUES:
        raise BookingNotCancellable(
            f"A {booking.status} booking cannot be cancelled")
    if booking.check_in <= today:
        raise BookingNotCancellable(
            "Cannot cancel booking on or after the check-in date")

    now = datetime.now(timezone.utc)
    try:
        # single conditional update; a concurrent cancel leaves nothing to match
        updated = (
            db.query(Booking)
            .filter(Booking.id == booking.id, Booking.status.in_(ACTIVE_STATUS_VALUES))
            .update({
                Booking.status: BookingStatus.cancelled.value,
                Booking.cancelled_at: now,
                Booking.updated_at: now
            }, synchronize_session=False)
        )
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Persistence failure while cancelling booking %s", booking_id)
        raise BookingSystemError("Booking could not be cancelled") from exc

    if not updated:
        raise BookingNotCancellable("Booking is already cancelled")

    db.refresh(booking)
    logger.info("Booking %s cancelled by user %s, rooms %s released",
                booking.id, user_id, booking.rooms)
    return booking


# ----------------- Stats -----------------
def get_booking_stats(db: Session, user_id: str) -> BookingStats:
    base = db.query(Booking).filter(Booking.user_id == user_id)

    total = base.with_entities(func.count(Booking.id)).scalar() or 0
    confirmed = base.filter(Booking.status == BookingStatus.confirmed.value)\
        .with_entities(func.count(Booking.id)).scalar() or 0
    cancelled = base.filter(Booking.status == BookingStatus.cancelled.value)\
        .with_entities(func.count(Booking.id)).scalar() or 0
    total_spent = base.filter(Booking.status == BookingStatus.confirmed.value)\
        .with_entities(func.coalesce(func.sum(Booking.total_price), 0)).scalar() or 0

    thirty_days_ago = datetime.now(timezone.utc) - timedelta(days=30)
    recent = base.filter(Booking.created_at >= thirty_days_ago)\
        .with_entities(func.count(Booking.id)).scalar() or 0

    total_spent = float(total_spent)
    return BookingStats(
        total=int(total),
        confirmed=int(confirmed),
        cancelled=int(cancelled),
        recent=int(recent),
        total_spent=round(total_spent, 2),
        average_spent=round(total_spent / total, 2) if total else 0.0
    )


# --------------------Booking status lookup by Enum -----------
def booking_status_lookup() -> List[Lookup]:
    return [
        Lookup(id=status.value, name=status.name.capitalize())
        for status in BookingStatus
    ]
