"""
Exception handlers that turn typed errors into the API error envelope
``{"code": ..., "message": ...}``. Routes raise; nothing here swallows.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from hexbooking.core.errors import CODE_BAD_REQUEST, DomainError
from hexbooking.schemas.availability import format_validation_message

logger = logging.getLogger(__name__)


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.warning(
            "%s %s failed: %s",
            request.method,
            request.url.path,
            exc.message,
            extra={"code": exc.code, "context": exc.context},
        )
    return JSONResponse(status_code=exc.http_status, content=exc.to_dict())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"code": CODE_BAD_REQUEST, "message": format_validation_message(exc.errors())},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
