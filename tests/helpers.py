from datetime import date, timedelta
from decimal import Decimal

from reservation_service.app.models.hospitality import Room
from reservation_service.app.services.availability_service import group_by_floor
from reservation_service.app.services.inventory_service import floor_position_for
from reservation_service.app.services.pricing_service import is_peak_season


def make_room(room_number: int, base_price: str = "100.00") -> Room:
    """Detached Room for the pure services."""
    floor, position = floor_position_for(room_number)
    return Room(room_number=room_number, floor=floor, position=position,
                room_type="standard", base_price=Decimal(base_price))


def rooms_by_floor(*room_numbers):
    return group_by_floor([make_room(n) for n in room_numbers])


def numbers(rooms):
    return [room.room_number for room in rooms]


def plain_weekday_after(days: int, weekday: int = 2) -> date:
    """First date at least `days` out that falls on `weekday` and outside peak season."""
    day = date.today() + timedelta(days=days)
    while day.weekday() != weekday or is_peak_season(day):
        day += timedelta(days=1)
    return day
