"""Error taxonomy rendered at the HTTP boundary as ``{"error": ...}`` JSON."""

from __future__ import annotations

import asyncio

from sqlalchemy.exc import SQLAlchemyError


class ApiError(Exception):
    """Base error carrying the HTTP status and the user-facing message."""

    status_code = 500

    def __init__(self, error: str, message: str | None = None, status_code: int | None = None):
        super().__init__(error)
        self.error = error
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        body = {"error": self.error}
        if self.message:
            body["message"] = self.message
        return body


class ValidationFailed(ApiError):
    status_code = 400


class AuthenticationFailed(ApiError):
    status_code = 401


class MissingToken(AuthenticationFailed):
    pass


class InvalidToken(ApiError):
    status_code = 403


class NotFound(ApiError):
    status_code = 404


class Conflict(ApiError):
    status_code = 409


class InternalError(ApiError):
    status_code = 500


class DuplicatePhoneError(Exception):
    """Raised by the record layer when ``telefone`` violates its unique constraint."""

    def __init__(self, telefone: str):
        super().__init__(f"telefone already registered: {telefone}")
        self.telefone = telefone


# Failures of the record store: driver-level connection errors and command
# timeouts reach the caller unwrapped by SQLAlchemy.
STORE_ERRORS = (SQLAlchemyError, OSError, TimeoutError, asyncio.TimeoutError)
