from datetime import datetime, date
from uuid import UUID
from typing import List, Optional
from pydantic import BaseModel
from shared.core.schemas import CommonQueryParams


# ----------------- Create -----------------
class BookingCreate(BaseModel):
    # range checks belong to the coordinator so they surface as 400s
    num_rooms: int
    check_in: date
    check_out: date


class BookingCreateOut(BaseModel):
    booking_id: UUID
    rooms: List[int]
    floors: List[int]
    travel_time: int
    total_price: float
    status: str
    strategy: Optional[str] = None
    check_in: date
    check_out: date
    nights: int


# ----------------- Out -----------------
class BookingOut(BaseModel):
    booking_id: UUID
    user_id: str
    rooms: List[int]
    total_rooms: int
    travel_time: int
    total_price: float
    allocation_strategy: Optional[str] = None
    check_in: date
    check_out: date
    nights: int
    status: str
    payment_status: str
    booking_date: Optional[date] = None
    created_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None


class BookingCancelOut(BaseModel):
    booking_id: UUID
    status: str


# ----------------- Request -----------------
class BookingRequest(CommonQueryParams):
    status: Optional[str] = None


# ----------------- List Response -----------------
class BookingListResponse(BaseModel):
    bookings: List[BookingOut]
    total: int


# ------------ stats ------------------
class BookingStats(BaseModel):
    total: int
    confirmed: int
    cancelled: int
    recent: int
    total_spent: float
    average_spent: float
