"""Exception handlers giving every error response an ``error`` field."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def _describe_field(error: dict) -> str:
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    return ".".join(location) or "body"


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTPException as ``{"error": detail}``."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report missing or malformed input as 400 with the offending fields."""
    errors = exc.errors()
    missing = [_describe_field(error) for error in errors if error.get("type") == "missing"]
    fields = sorted({_describe_field(error) for error in errors})

    if missing:
        message = f"Missing required fields: {', '.join(missing)}"
    else:
        message = f"Invalid fields: {', '.join(fields)}"

    logger.warning(f"{request.method} {request.url.path} rejected: {message}")
    return JSONResponse(status_code=400, content={"error": message, "fields": fields})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception in {request.method} {request.url.path}: {exc}",
        exc_info=True,
    )
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
