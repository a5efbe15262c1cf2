from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from packages.zoning_core.errors import (
    ConfigurationError,
    GeocodingError,
    InvalidInputError,
    TransportError,
    ZoningError,
)

logger = logging.getLogger(__name__)


def _error_body(code: str, message: str, **extra: Any) -> dict[str, Any]:
    return {"detail": {"code": code, "message": message, **extra}}


def status_for(exc: ZoningError) -> int:
    if isinstance(exc, InvalidInputError):
        return 400
    if isinstance(exc, GeocodingError):
        return 422
    if isinstance(exc, ConfigurationError):
        return 503
    if isinstance(exc, TransportError):
        return 504 if exc.timed_out else 502
    return 500


async def _handle_zoning_error(request: Request, exc: ZoningError) -> JSONResponse:
    status_code = status_for(exc)
    if isinstance(exc, InvalidInputError):
        return JSONResponse(status_code=status_code, content=_error_body(exc.code, exc.message))
    if isinstance(exc, GeocodingError):
        logger.info("geocoding failed path=%s status=%s", request.url.path, exc.provider_status)
        return JSONResponse(
            status_code=status_code,
            content=_error_body(exc.code, "address could not be geocoded", provider_status=exc.provider_status),
        )
    if isinstance(exc, ConfigurationError):
        logger.error("configuration error path=%s: %s", request.url.path, exc.message)
        return JSONResponse(status_code=status_code, content=_error_body(exc.code, "service is not configured for this operation"))
    if isinstance(exc, TransportError):
        logger.error(
            "upstream failure path=%s collaborator=%s timed_out=%s: %s",
            request.url.path,
            exc.collaborator,
            exc.timed_out,
            exc.message,
        )
        return JSONResponse(status_code=status_code, content=_error_body(exc.code, "upstream service unavailable"))
    logger.error("unhandled zoning error path=%s: %s", request.url.path, exc.message)
    return JSONResponse(status_code=status_code, content=_error_body(exc.code, "internal error"))


async def _handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = [".".join(str(part) for part in err.get("loc", ()) if part != "body") for err in exc.errors()]
    return JSONResponse(
        status_code=400,
        content=_error_body("INVALID_REQUEST", "request body is invalid", fields=[f for f in fields if f]),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ZoningError, _handle_zoning_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
