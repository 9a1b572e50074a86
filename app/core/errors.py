# app/core/errors.py - Domain error taxonomy, translated to HTTP responses in app.main
from fastapi import status


class AppError(Exception):
    """Base class for errors raised at an operation boundary"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Missing or invalid field, malformed id, or unique-constraint violation"""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(AppError):
    """Course deletion blocked by students still referencing it"""

    status_code = status.HTTP_409_CONFLICT


class StorageError(AppError):
    """Underlying store failure; the message is logged but never returned to the client"""

    public_message = "Internal server error"


class AggregationError(StorageError):
    pass


__all__ = [
    "AppError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "StorageError",
    "AggregationError",
]
