from starlette.middleware.base import BaseHTTPMiddleware
from fastapi.responses import JSONResponse
from fastapi import Request
from shared.core.schemas import JsonOutResult
from typing import Callable
import json

SUCCESS_MESSAGES = {
    201: "Created successfully",
}


class JsonResponseMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable):
        # Skip docs/openapi endpoints
        if request.url.path.startswith(("/openapi", "/docs", "/redoc")):
            return await call_next(request)

        response = await call_next(request)

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            return response

        # Read the full body
        body_bytes = b""
        async for chunk in response.body_iterator:
            body_bytes += chunk

        async def body_gen():
            yield body_bytes
        response.body_iterator = body_gen()

        try:
            data = json.loads(body_bytes.decode("utf-8"))
        except ValueError:
            return response

        headers = {k: v for k, v in response.headers.items()
                   if k.lower() != "content-length"}

        # Already wrapped by an exception handler or a route
        if isinstance(data, dict) and {"status", "status_code", "message"}.issubset(data.keys()):
            return JSONResponse(content=data, status_code=response.status_code, headers=headers)

        # Error responses (4xx/5xx) produced outside the handlers
        if not (200 <= response.status_code < 400):
            message = ""
            if isinstance(data, dict):
                message = data.get("detail") or data.get("message") or ""
            elif isinstance(data, str):
                message = data
            wrapped_error = JsonOutResult(
                data=None,
                status="Failed",
                status_code=str(response.status_code),
                message=str(message) or "An unexpected error occurred",
            ).model_dump()
            return JSONResponse(content=wrapped_error, status_code=response.status_code, headers=headers)

        wrapped = JsonOutResult(
            data=data,
            status="Success",
            status_code=str(response.status_code),
            message=SUCCESS_MESSAGES.get(
                response.status_code, "Data retrieved successfully")
        ).model_dump()

        return JSONResponse(content=wrapped, status_code=response.status_code, headers=headers)
