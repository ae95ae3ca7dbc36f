# dailylog/core/exceptions.py
"""
Errors raised by the log service.

Every error carries the message sent back to the client and the HTTP status
it maps to. The wire shape is always ``{"error": <message>}``.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse


class LogServiceError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class LogValidationError(LogServiceError):
    """A required field is missing or malformed."""
    status_code = status.HTTP_400_BAD_REQUEST


class LogOperationFailed(LogServiceError):
    """The storage layer rejected a read or write."""
    status_code = status.HTTP_400_BAD_REQUEST


class LogNotFound(LogServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class StorageUnavailable(LogServiceError):
    """The storage target could not be reached."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def log_service_exception_handler(request: Request, exc: LogServiceError) -> JSONResponse:
    return error_response(exc.status_code, exc.message)
