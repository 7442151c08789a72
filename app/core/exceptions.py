"""Domain errors raised by the service layer.

Routers never build HTTP errors for business failures themselves; the handler
registered in ``app.main`` turns these into ``{"detail": ...}`` responses.
"""
from fastapi import status


class PharmacyError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(PharmacyError):
    status_code = status.HTTP_404_NOT_FOUND


class ValidationFailed(PharmacyError):
    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(PharmacyError):
    status_code = status.HTTP_409_CONFLICT


class InsufficientStockError(ConflictError):
    def __init__(self, medicine_name: str, available: int):
        super().__init__(
            "Insufficient stock for {}. Available: {}".format(medicine_name, available)
        )
        self.medicine_name = medicine_name
        self.available = available


class AuthenticationError(PharmacyError):
    status_code = status.HTTP_401_UNAUTHORIZED


class PermissionDenied(PharmacyError):
    status_code = status.HTTP_403_FORBIDDEN


__all__ = [
    "AuthenticationError",
    "ConflictError",
    "InsufficientStockError",
    "NotFoundError",
    "PermissionDenied",
    "PharmacyError",
    "ValidationFailed",
]
