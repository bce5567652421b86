from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable

from ..core.exceptions import InvalidDateRange

WEEKEND_SURCHARGE = Decimal("1.20")
PEAK_SEASON_SURCHARGE = Decimal("1.30")
WEEKEND_DAYS = {4, 5}  # Friday, Saturday
CENTS = Decimal("0.01")


def is_weekend(day: date) -> bool:
    return day.weekday() in WEEKEND_DAYS


def is_peak_season(day: date) -> bool:
    # Dec 20 - Jan 5
    return (day.month == 12 and day.day >= 20) or (day.month == 1 and day.day <= 5)


def count_nights(check_in: date, check_out: date) -> int:
    nights = (check_out - check_in).days
    if nights < 1:
        raise InvalidDateRange("Minimum stay is 1 night")
    return nights


def nightly_rate(room, check_in: date) -> Decimal:
    """Per-night rate for one room. Surcharges follow the check-in day for the whole stay."""
    rate = Decimal(str(room.base_price))
    if is_weekend(check_in):
        rate *= WEEKEND_SURCHARGE
    if is_peak_season(check_in):
        rate *= PEAK_SEASON_SURCHARGE
    return rate


def calculate_total_price(rooms: Iterable, check_in: date, check_out: date) -> Decimal:
    nights = count_nights(check_in, check_out)
    total = sum((nightly_rate(room, check_in) * nights for room in rooms), Decimal("0"))
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)
