"""Error types raised by the service layer and mapped to HTTP responses."""
from __future__ import annotations


class RegistrationError(Exception):
    """Base error with a user-facing message and an HTTP status."""

    status = 500

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(RegistrationError):
    """Missing required input or a duplicate registration."""

    status = 400


class NotFoundError(RegistrationError):
    """Unknown event or unmatched registration."""

    status = 404


class PersistenceError(RegistrationError):
    """A store write returned failure."""

    status = 500
