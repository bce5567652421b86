from decimal import Decimal
from typing import Dict, List, Tuple

from ..enum.hospitality_enum import RoomType

# Floors 1-9 hold 10 rooms, the top floor holds 7
ROOMS_PER_FLOOR: Dict[int, int] = {floor: 10 for floor in range(1, 10)}
ROOMS_PER_FLOOR[10] = 7

TOP_FLOOR = max(ROOMS_PER_FLOOR)
TOTAL_ROOMS = sum(ROOMS_PER_FLOOR.values())  # 97

ROOM_PRICES: Dict[RoomType, Decimal] = {
    RoomType.standard: Decimal("100.00"),
    RoomType.deluxe: Decimal("150.00"),
    RoomType.suite: Decimal("200.00"),
}


def room_number_for(floor: int, position: int) -> int:
    if floor not in ROOMS_PER_FLOOR:
        raise ValueError(f"Floor {floor} does not exist")
    if not 1 <= position <= ROOMS_PER_FLOOR[floor]:
        raise ValueError(f"Floor {floor} has no position {position}")
    if floor == TOP_FLOOR:
        return 1000 + position
    return floor * 100 + position


def floor_position_for(room_number: int) -> Tuple[int, int]:
    if room_number > 1000:
        floor, position = TOP_FLOOR, room_number - 1000
    else:
        floor, position = divmod(room_number, 100)
    # round-trip rejects numbers like 111 or 1008
    room_number_for(floor, position)
    return floor, position


def room_type_for(floor: int) -> RoomType:
    if floor == TOP_FLOOR:
        return RoomType.suite
    if floor >= 8:
        return RoomType.deluxe
    return RoomType.standard


def build_inventory() -> List[dict]:
    """The full room grid, ordered by floor then position."""
    rooms = []
    for floor, count in sorted(ROOMS_PER_FLOOR.items()):
        room_type = room_type_for(floor)
        for position in range(1, count + 1):
            rooms.append({
                "room_number": room_number_for(floor, position),
                "floor": floor,
                "position": position,
                "room_type": room_type.value,
                "base_price": ROOM_PRICES[room_type],
            })
    return rooms
