from .rooms import Room
from .bookings import Booking
from .booking_rooms import BookingRoom
