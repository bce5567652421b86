class AppStatusCode:
    # Authentication
    AUTHENTICATION_TOKEN_INVALID = "200"
    AUTHENTICATION_TOKEN_EXPIRED = "201"

    # Input / validation
    INVALID_INPUT = "300"
    INVALID_DATE_RANGE = "302"

    # Resources
    NOT_FOUND = "400"

    # Reservation outcomes
    INSUFFICIENT_ROOMS = "500"
    BOOKING_CONFLICT = "501"
    BOOKING_NOT_CANCELLABLE = "502"

    # Infrastructure
    OPERATION_FAILED = "900"
    OPERATION_ERROR = "901"
