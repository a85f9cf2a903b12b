"""API error handling

Use case errors are raised as ClientError and rendered as
{"error": {"code": ..., "message": ...}}.
"""

import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from libs.result import Error

logger = logging.getLogger(__name__)


class ClientError(Exception):
    """Use case error surfaced to the HTTP client"""

    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.error = error
        self.status_code = status_code
        super().__init__(error.message)


def error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.error.code} "
            f"{exc.error.message} ({exc.error.reason})"
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.error.code, exc.error.message),
    )


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "Invalid request"
    if errors:
        location = ".".join(str(part) for part in errors[0].get("loc", ()) if part != "body")
        message = f"{location}: {errors[0].get('msg')}" if location else errors[0].get("msg")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("VALIDATION_ERROR", message),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ClientError, client_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
