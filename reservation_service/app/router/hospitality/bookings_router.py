from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ...schemas.hospitality.bookings_schemas import (
    BookingCancelOut,
    BookingCreate,
    BookingCreateOut,
    BookingListResponse,
    BookingOut,
    BookingRequest,
    BookingStats
)
from ...crud.hospitality import bookings_crud as crud
from shared.core.auth import validate_current_token
from shared.core.database import get_reservation_db as get_db
from shared.core.schemas import Lookup, UserToken


router = APIRouter(prefix="/api/bookings", tags=["Bookings"])


# ----------------- Create Booking -----------------
@router.post("", response_model=BookingCreateOut, status_code=status.HTTP_201_CREATED)
def create_booking_route(
    booking: BookingCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    created = crud.create_booking(
        db=db,
        user_id=current_user.user_id,
        num_rooms=booking.num_rooms,
        check_in=booking.check_in,
        check_out=booking.check_out
    )
    return crud.booking_create_out(created)


# ---------------- List Bookings ----------------
@router.get("", response_model=BookingListResponse)
def get_bookings_endpoint(
    params: BookingRequest = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_bookings(db, current_user.user_id, params)


@router.get("/stats", response_model=BookingStats)
def get_booking_stats_endpoint(
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.get_booking_stats(db, current_user.user_id)


# ----------------status Lookup by enum ----------------
@router.get("/status-lookup", response_model=List[Lookup])
def booking_status_lookup(
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.booking_status_lookup()


@router.get("/{booking_id}", response_model=BookingOut)
def get_booking_endpoint(
    booking_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    return crud.booking_out(crud.get_booking(db, booking_id, current_user.user_id))


# ----------------- Cancel Booking -----------------
@router.put("/{booking_id}/cancel", response_model=BookingCancelOut)
def cancel_booking_route(
    booking_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    booking = crud.cancel_booking(db, booking_id, current_user.user_id)
    return BookingCancelOut(booking_id=booking.id, status=booking.status)
