"""
Custom exceptions and error handlers for consistent error responses.

Provides standardized error codes and global exception handlers.
"""

import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from typing import Any, Dict

from parcel_tracker.app.schemas.parcel import ParcelRecord

logger = logging.getLogger(__name__)


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, status_code: int = 500, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class ParcelLookupError(AppException):
    """
    Raised when a parcel cannot be read.

    Always carries the zero-value record in ``parcel`` so callers that only
    check ``parcel.number == 0`` keep working.
    """

    def __init__(self, message: str, error_code: str, status_code: int, number: int):
        super().__init__(
            message=message,
            error_code=error_code,
            status_code=status_code,
            details={"resource": "parcel", "number": number}
        )
        self.number = number
        self.parcel = ParcelRecord()


class ParcelNotFoundError(ParcelLookupError):
    """Raised when no parcel row matches the requested number."""

    def __init__(self, number: int):
        super().__init__(
            message=f"Parcel with number {number} not found",
            error_code="ERR_NOT_FOUND_001",
            status_code=status.HTTP_404_NOT_FOUND,
            number=number
        )


class ParcelQueryError(ParcelLookupError):
    """Raised when the database fails while reading a parcel."""

    def __init__(self, number: int):
        super().__init__(
            message=f"Failed to read parcel with number {number}",
            error_code="ERR_DB_001",
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            number=number
        )


class InvalidParcelStateError(AppException):
    """Raised when an operation is not allowed in the parcel's current status."""

    def __init__(self, number: int, current_status: str, action: str):
        super().__init__(
            message=f"Cannot {action} parcel {number} in status '{current_status}'",
            error_code="ERR_STATE_001",
            status_code=status.HTTP_409_CONFLICT,
            details={"number": number, "status": current_status, "action": action}
        )


# Global Exception Handlers

async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handler for custom application exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": exc.details
        }
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handler for HTTPException (FastAPI and Starlette) with standardized format."""
    # Map status code to error code
    error_code_map = {
        400: "ERR_BAD_REQUEST",
        404: "ERR_NOT_FOUND",
        405: "ERR_METHOD_NOT_ALLOWED",
        500: "ERR_INTERNAL_SERVER"
    }

    error_code = error_code_map.get(exc.status_code, "ERR_UNKNOWN")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": error_code,
            "message": exc.detail,
            "details": {}
        }
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handler for Pydantic validation errors."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error_code": "ERR_VALIDATION",
            "message": "Validation error",
            "details": {
                "errors": jsonable_encoder(exc.errors())
            }
        }
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler for unhandled exceptions."""
    logger.error(
        "Unhandled exception on %s %s",
        request.method,
        request.url.path,
        exc_info=(type(exc), exc, exc.__traceback__),
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error_code": "ERR_INTERNAL_SERVER",
            "message": "An internal server error occurred",
            "details": {}
        }
    )
