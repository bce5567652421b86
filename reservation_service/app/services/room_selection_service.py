import logging
from dataclasses import dataclass
from itertools import combinations
from typing import List, Optional, Sequence

from ..core.exceptions import InsufficientRooms, InvalidBookingRequest
from ..enum.hospitality_enum import AllocationStrategy
from .inventory_service import TOTAL_ROOMS
from .travel_time_service import calculate_travel_time, travel_time_for

logger = logging.getLogger(__name__)

MAX_ROOMS_PER_BOOKING = 5


@dataclass
class RoomSelection:
    rooms: List
    travel_time: int
    strategy: AllocationStrategy

    @property
    def room_numbers(self) -> List[int]:
        return [room.room_number for room in self.rooms]

    @property
    def floors(self) -> List[int]:
        return sorted({room.floor for room in self.rooms})


def best_window_on_floor(floor_rooms: Sequence, count: int) -> Optional[List]:
    """Cheapest run of `count` position-adjacent free rooms on one floor; first window wins ties."""
    ordered = sorted(floor_rooms, key=lambda room: room.position)
    best, best_span = None, None
    for start in range(len(ordered) - count + 1):
        window = ordered[start:start + count]
        span = window[-1].position - window[0].position
        if best_span is None or span < best_span:
            best, best_span = window, span
    return best


def cheapest_combination(pool: Sequence, count: int) -> Optional[List]:
    """
    Brute force over every `count`-sized subset of `pool`, enumerated floor by floor
    then position by position; the first subset reaching the minimum cost wins.
    Only ever reached with count <= 5 and an inventory of at most 97 rooms.
    """
    if count > MAX_ROOMS_PER_BOOKING or len(pool) > TOTAL_ROOMS:
        raise ValueError(
            f"Combination search is bounded to {MAX_ROOMS_PER_BOOKING} of {TOTAL_ROOMS} rooms")

    pool = sorted(pool, key=lambda room: (room.floor, room.position))
    floors = [room.floor for room in pool]
    positions = [room.position for room in pool]
    best, best_cost = None, None
    for indices in combinations(range(len(pool)), count):
        picked_positions = [positions[i] for i in indices]
        # pool is floor-ordered, so the last index sits on the highest floor
        cost = travel_time_for(
            floors[indices[-1]], min(picked_positions), max(picked_positions))
        if best_cost is None or cost < best_cost:
            best, best_cost = indices, cost
    if best is None:
        return None
    return [pool[i] for i in best]


def select_rooms(free_rooms_by_floor: List[List], count: int) -> RoomSelection:
    """
    Pick `count` rooms out of the free rooms, indexed by floor as produced by
    availability_service.group_by_floor.

    The lowest floor with enough free rooms always wins, even when another floor
    would be cheaper. Only when no single floor can hold the request does the
    search span floors.
    """
    if not 1 <= count <= MAX_ROOMS_PER_BOOKING:
        raise InvalidBookingRequest(
            f"Number of rooms must be between 1 and {MAX_ROOMS_PER_BOOKING}")

    # 1. same floor
    for floor_rooms in free_rooms_by_floor:
        if len(floor_rooms) >= count:
            window = best_window_on_floor(floor_rooms, count)
            return RoomSelection(
                rooms=window,
                travel_time=calculate_travel_time(window),
                strategy=AllocationStrategy.same_floor
            )

    # 2. across floors
    pool = [room for floor_rooms in free_rooms_by_floor for room in floor_rooms]
    if len(pool) >= count:
        picked = cheapest_combination(pool, count)
        if picked:
            return RoomSelection(
                rooms=picked,
                travel_time=calculate_travel_time(picked),
                strategy=AllocationStrategy.across_floors
            )

    logger.info("No room set found: %s requested, %s free", count, len(pool))
    raise InsufficientRooms(
        f"Not enough rooms available. Need {count}, but only {len(pool)} free for these dates")
