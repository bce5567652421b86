import logging
from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...schemas.hospitality.rooms_schemas import (
    AvailabilityOut,
    DateRangeRequest,
    OccupancyOut,
    OptionalDateRangeRequest,
    QuoteOut,
    QuoteRequest,
    ResetOut,
    RoomListResponse,
    RoomOut,
    RoomSearchRequest,
    RoomTypeSummary
)
from ...crud.hospitality import rooms_crud as crud
from shared.core.auth import validate_current_token
from shared.core.database import get_reservation_db as get_db
from shared.core.schemas import UserToken


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/rooms", tags=["Rooms"])


def _room_list(rooms) -> RoomListResponse:
    return RoomListResponse(
        rooms=[RoomOut.model_validate(room) for room in rooms],
        total=len(rooms)
    )


# ---------------- List Rooms ----------------
@router.get("", response_model=RoomListResponse)
def get_rooms_endpoint(db: Session = Depends(get_db)):
    return _room_list(crud.get_rooms(db))


# ---------------- Free rooms for a date range ----------------
@router.get("/available", response_model=AvailabilityOut)
def get_available_rooms_endpoint(
    params: DateRangeRequest = Depends(),
    db: Session = Depends(get_db)
):
    return crud.get_availability(db, params.check_in, params.check_out)


# ---------------- Dry-run allocation ----------------
@router.get("/quote", response_model=QuoteOut)
def quote_rooms_endpoint(
    params: QuoteRequest = Depends(),
    db: Session = Depends(get_db)
):
    return crud.quote_rooms(db, params.num_rooms, params.check_in, params.check_out)


@router.get("/types", response_model=List[RoomTypeSummary])
def room_types_endpoint(
    params: OptionalDateRangeRequest = Depends(),
    db: Session = Depends(get_db)
):
    return crud.room_type_summary(db, params.check_in, params.check_out)


@router.get("/search", response_model=RoomListResponse)
def search_rooms_endpoint(
    params: RoomSearchRequest = Depends(),
    db: Session = Depends(get_db)
):
    return _room_list(crud.search_rooms(db, params))


@router.get("/floor/{floor}", response_model=RoomListResponse)
def rooms_by_floor_endpoint(floor: int, db: Session = Depends(get_db)):
    return _room_list(crud.get_rooms_by_floor(db, floor))


@router.get("/number/{room_number}", response_model=RoomOut)
def room_by_number_endpoint(room_number: int, db: Session = Depends(get_db)):
    return RoomOut.model_validate(crud.get_room_by_number(db, room_number))


# ---------------- Demo data ----------------
@router.post("/random-occupancy", response_model=OccupancyOut)
def random_occupancy_endpoint(
    params: DateRangeRequest,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    logger.info("Random occupancy requested by user %s", current_user.user_id)
    return crud.generate_random_occupancy(db, params.check_in, params.check_out)


@router.post("/reset-all", response_model=ResetOut)
def reset_all_endpoint(
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(validate_current_token)
):
    logger.info("Booking reset requested by user %s", current_user.user_id)
    return crud.reset_all_bookings(db)
