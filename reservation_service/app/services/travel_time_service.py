from typing import Iterable

HORIZONTAL_TIME = 1  # minutes per position
VERTICAL_TIME = 2    # minutes per floor


def travel_time_for(max_floor: int, min_pos: int, max_pos: int) -> int:
    return (max_floor - 1) * VERTICAL_TIME + (max_pos - min_pos) * HORIZONTAL_TIME


def calculate_travel_time(rooms: Iterable) -> int:
    """
    Minutes from the ground-floor entrance to the highest booked floor, plus the
    corridor walk spanning the booked positions:

        (max_floor - 1) * VERTICAL_TIME + (max_pos - min_pos) * HORIZONTAL_TIME

    Rooms {101, 102, 105, 106} cost 5, rooms {201, 202} cost 3.
    """
    rooms = list(rooms)
    if not rooms:
        raise ValueError("Travel time needs at least one room")

    positions = [room.position for room in rooms]
    return travel_time_for(max(room.floor for room in rooms), min(positions), max(positions))
