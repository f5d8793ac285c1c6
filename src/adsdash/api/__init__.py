"""Backend API client and its error types."""

from .client import ApiClient, build_query
from .errors import (
    ApiError,
    ConfigError,
    ErrorKind,
    HttpError,
    NetworkError,
    ValidationIssue,
)

__all__ = [
    "ApiClient",
    "ApiError",
    "ConfigError",
    "ErrorKind",
    "HttpError",
    "NetworkError",
    "ValidationIssue",
    "build_query",
]
