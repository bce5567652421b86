from shared.core.exceptions import ServiceError
from shared.utils.app_status_code import AppStatusCode


class BookingError(ServiceError):
    pass


class InvalidBookingRequest(BookingError):
    """User-correctable input problem. Never retried."""
    http_status = 400
    status_code = AppStatusCode.INVALID_INPUT


class InvalidDateRange(InvalidBookingRequest):
    status_code = AppStatusCode.INVALID_DATE_RANGE

    def __init__(self, message: str = "Check-out date must be after check-in date"):
        super().__init__(message)


class InsufficientRooms(BookingError):
    """No room combination satisfies the request for the given dates."""
    http_status = 409
    status_code = AppStatusCode.INSUFFICIENT_ROOMS


class BookingConflict(BookingError):
    """A concurrent booking kept winning the race for the chosen rooms."""
    http_status = 409
    status_code = AppStatusCode.BOOKING_CONFLICT


class BookingNotFound(BookingError):
    http_status = 404
    status_code = AppStatusCode.NOT_FOUND

    def __init__(self, message: str = "Booking not found"):
        super().__init__(message)


class BookingNotCancellable(BookingError):
    http_status = 400
    status_code = AppStatusCode.BOOKING_NOT_CANCELLABLE


class BookingSystemError(BookingError):
    http_status = 500
    status_code = AppStatusCode.OPERATION_FAILED
