# app/core/errors.py

from typing import Optional

from fastapi import status


class AppError(Exception):
    """
    Base class for every failure that crosses the HTTP boundary.
    `message` is safe to show the caller; `reason` is for server logs only.
    """
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "An internal error occurred"

    def __init__(self, message: Optional[str] = None, reason: Optional[str] = None):
        self.message = message or self.default_message
        self.reason = reason
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed input or a routing code the bank API would not verify"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class ConflictError(AppError):
    """Raised when the account number is already registered"""
    status_code = status.HTTP_409_CONFLICT
    default_message = "Account number already registered."


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"


class ExternalServiceError(AppError):
    """Raised when the IFSC verification API is unreachable or returns garbage"""
    status_code = status.HTTP_502_BAD_GATEWAY
    default_message = "Failed to communicate with external service"


class StorageError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Database operation failed"


class InternalError(AppError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "An internal error occurred"
