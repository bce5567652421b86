from shared.utils.app_status_code import AppStatusCode


class ServiceError(Exception):
    """Base for errors a service raises on purpose and the API turns into an envelope."""

    http_status = 400
    status_code = AppStatusCode.OPERATION_ERROR

    def __init__(self, message: str, status_code: str | None = None, http_status: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if http_status is not None:
            self.http_status = http_status


class AuthenticationError(ServiceError):
    http_status = 401
    status_code = AppStatusCode.AUTHENTICATION_TOKEN_INVALID


class TokenExpiredError(AuthenticationError):
    status_code = AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED
