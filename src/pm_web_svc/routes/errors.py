"""Conversion of service-layer exceptions into HTTP errors."""

import logging

from fastapi import HTTPException

from ..services.errors import NotFoundError, StoreError, ValidationError

logger = logging.getLogger(__name__)


def to_http_exception(e: Exception) -> HTTPException:
    """Map a service exception to the HTTPException a route should raise.

    NotFoundError becomes 404, ValidationError 400, StoreError 500 with its
    own message, and anything else a generic 500.
    """
    if isinstance(e, HTTPException):
        return e
    if isinstance(e, NotFoundError):
        logger.warning(f"Not found: {e}")
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, ValidationError):
        logger.warning(f"Rejected request: {e}")
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, StoreError):
        return HTTPException(status_code=500, detail=str(e))

    logger.error(e, exc_info=True)
    return HTTPException(status_code=500, detail="Internal server error")
