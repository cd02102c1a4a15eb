"""Public error exports for s3drive."""

from __future__ import annotations

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    HttpErrorInfo,
    InvalidArgumentError,
    InvalidStateError,
    NetworkError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ReadOnlyError,
    S3DriveError,
    map_http_error,
)

__all__ = [
    "S3DriveError",
    "InvalidStateError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "NetworkError",
    "ApiError",
    "ReadOnlyError",
    "HttpErrorInfo",
    "map_http_error",
]
