from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel


class RoomOut(BaseModel):
    room_number: int
    floor: int
    position: int
    room_type: str
    base_price: float
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class RoomListResponse(BaseModel):
    rooms: List[RoomOut]
    total: int


# ----------------- Search -----------------
class RoomSearchRequest(EmptyStringModel):
    floor: Optional[int] = None
    room_type: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None


# ----------------- Date range -----------------
class DateRangeRequest(EmptyStringModel):
    check_in: date
    check_out: date


class OptionalDateRangeRequest(EmptyStringModel):
    check_in: Optional[date] = None
    check_out: Optional[date] = None


class QuoteRequest(DateRangeRequest):
    num_rooms: int


# ----------------- Availability -----------------
class FloorAvailability(BaseModel):
    floor: int
    rooms: List[int]
    free: int


class AvailabilityOut(BaseModel):
    check_in: date
    check_out: date
    total_free: int
    floors: List[FloorAvailability]


class RoomTypeSummary(BaseModel):
    room_type: str
    count: int
    avg_price: float
    available: Optional[int] = None


class QuoteOut(BaseModel):
    rooms: List[int]
    floors: List[int]
    travel_time: int
    strategy: str
    nights: int
    total_price: float


# ----------------- Simulation / reset -----------------
class OccupancyOut(BaseModel):
    check_in: date
    check_out: date
    total_rooms: int
    occupied_rooms: int
    available_rooms: int
    bookings_created: int
    occupancy_rate: float


class ResetOut(BaseModel):
    cancelled_bookings: int
    provisioned_rooms: int
    total_rooms: int
