from __future__ import annotations

from typing import Any


class CloudApiError(Exception):
    """Base client error."""

    structured = False


class ValidationError(CloudApiError, ValueError):
    """Client configuration is incomplete."""


class NetworkError(CloudApiError):
    """Transport/network layer error."""


class ApiError(CloudApiError):
    structured = True

    def __init__(self, status_code: int, error: str, message: str, details: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.error = error
        self.message = message
        self.details = details

    @property
    def payload(self) -> dict[str, Any]:
        return {"statusCode": self.status_code, "error": self.error, "message": self.message}


class AuthError(ApiError):
    """Auth-related API error."""
