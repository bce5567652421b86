from datetime import date
from typing import Iterable, List

from ..core.exceptions import InvalidDateRange
from ..enum.hospitality_enum import ACTIVE_BOOKING_STATUSES
from .inventory_service import TOP_FLOOR

ACTIVE_STATUS_VALUES = {status.value for status in ACTIVE_BOOKING_STATUSES}


def ranges_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    # half-open ranges: a stay ending on the 5th does not block one starting on the 5th
    return start_a < end_b and start_b < end_a


def validate_date_range(check_in: date, check_out: date):
    if check_out <= check_in:
        raise InvalidDateRange()


def booked_room_numbers(active_bookings: Iterable, check_in: date, check_out: date) -> set:
    booked = set()
    for booking in active_bookings:
        if booking.status not in ACTIVE_STATUS_VALUES:
            continue
        if ranges_overlap(booking.check_in, booking.check_out, check_in, check_out):
            booked.update(booking.rooms or [])
    return booked


def free_rooms(all_rooms: Iterable, active_bookings: Iterable, check_in: date, check_out: date) -> List:
    """Rooms not held by any pending/confirmed booking overlapping [check_in, check_out)."""
    validate_date_range(check_in, check_out)
    booked = booked_room_numbers(active_bookings, check_in, check_out)
    return sorted(
        (room for room in all_rooms if room.room_number not in booked),
        key=lambda room: (room.floor, room.position)
    )


def group_by_floor(rooms: Iterable) -> List[List]:
    """
    Index i holds the rooms on floor i sorted by position; index 0 is always empty.
    Walking the list front to back is walking the building bottom up.
    """
    floors: List[List] = [[] for _ in range(TOP_FLOOR + 1)]
    for room in rooms:
        floors[room.floor].append(room)
    for floor_rooms in floors:
        floor_rooms.sort(key=lambda room: room.position)
    return floors
