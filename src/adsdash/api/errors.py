"""Tagged error types raised by the API client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional

NETWORK_ERROR_MESSAGE = "Unable to reach the backend service. Please try again."


class ErrorKind(str, Enum):
    CONFIG = "config"
    NETWORK = "network"
    HTTP = "http"


@dataclass(frozen=True)
class ValidationIssue:
    """One field-level validation message from the backend."""

    message: str
    path: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.path}: {self.message}" if self.path else self.message

    @classmethod
    def from_payload(cls, raw: Any) -> Optional["ValidationIssue"]:
        if not isinstance(raw, dict):
            return None
        message = raw.get("message")
        if not message:
            return None
        path = raw.get("path")
        if isinstance(path, list):
            path = ".".join(str(part) for part in path)
        return cls(message=str(message), path=str(path) if path else None)


class ApiError(Exception):
    """Base for every failure surfaced by :class:`~adsdash.api.ApiClient`."""

    kind: ErrorKind
    status: Optional[int] = None

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def field_errors(self) -> list[ValidationIssue]:
        return []

    @property
    def not_found(self) -> bool:
        return False


class ConfigError(ApiError):
    """Required configuration (base URL, admin token) is missing."""

    kind = ErrorKind.CONFIG


class NetworkError(ApiError):
    """Transport failure; the request never produced an HTTP response."""

    kind = ErrorKind.NETWORK

    def __init__(self, message: str = NETWORK_ERROR_MESSAGE, *, detail: str | None = None) -> None:
        super().__init__(message)
        self.detail = detail


class HttpError(ApiError):
    """Non-2xx response, with any validation entries the body carried."""

    kind = ErrorKind.HTTP

    def __init__(
        self,
        status: int,
        message: str | None = None,
        field_errors: Iterable[ValidationIssue] = (),
    ) -> None:
        super().__init__(message or f"Request failed with status {status}")
        self.status = status
        self._field_errors = list(field_errors)

    @property
    def field_errors(self) -> list[ValidationIssue]:
        return list(self._field_errors)

    @property
    def not_found(self) -> bool:
        return self.status == 404


__all__ = [
    "ApiError",
    "ConfigError",
    "ErrorKind",
    "HttpError",
    "NETWORK_ERROR_MESSAGE",
    "NetworkError",
    "ValidationIssue",
]
