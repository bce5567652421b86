import logging

from fastapi import FastAPI, Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from shared.core.exceptions import ServiceError
from shared.helpers.json_response_helper import error_result
from shared.utils.app_status_code import AppStatusCode

logger = logging.getLogger(__name__)


def setup_exception_handlers(app: FastAPI):

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        headers = None
        if exc.http_status == 401:
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(
            content=error_result(exc.message, str(exc.status_code)),
            status_code=exc.http_status,
            headers=headers
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        status_code = AppStatusCode.OPERATION_FAILED
        if exc.status_code == 401:
            status_code = AppStatusCode.AUTHENTICATION_TOKEN_INVALID
        elif exc.status_code == 404:
            status_code = AppStatusCode.NOT_FOUND
        return JSONResponse(
            content=error_result(str(exc.detail), status_code),
            status_code=exc.status_code or 400,
            headers=getattr(exc, "headers", None)
        )

    # request body and query validation failures are 400s
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            content=error_result(str(exc), AppStatusCode.INVALID_INPUT),
            status_code=400
        )

    # Catch all unhandled exceptions
    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s",
                         request.method, request.url.path)
        return JSONResponse(
            content=error_result("Internal server error",
                                 AppStatusCode.OPERATION_FAILED),
            status_code=500
        )
