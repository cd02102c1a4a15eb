"""Exception hierarchy and HTTP error mapping for s3drive."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class S3DriveError(Exception):
    """
    Base exception for s3drive.

    Attributes:
        details: Optional structured information (e.g., HTTP status, S3 error code).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class InvalidStateError(S3DriveError):
    """Raised when the drive is used in an invalid state (e.g., after dispose)."""


class AuthError(S3DriveError):
    """Raised when credentials are missing, malformed or rejected."""


class PermissionError(S3DriveError):
    """Raised when access is denied (HTTP 403 without a credential problem)."""


class InvalidArgumentError(S3DriveError):
    """Raised when request arguments are invalid (HTTP 400, bad paths, etc.)."""


class NotFoundError(S3DriveError):
    """Raised when a bucket, key or prefix does not exist (HTTP 404)."""


class ConflictError(S3DriveError):
    """Raised when a conflict occurs (HTTP 409/412)."""


class RateLimitError(S3DriveError):
    """Raised when throttled (HTTP 429 or S3 SlowDown)."""


class NetworkError(S3DriveError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(S3DriveError):
    """Raised for unclassified store errors (5xx, unknown 4xx, etc.)."""


class ReadOnlyError(S3DriveError):
    """Raised by operations the drive never supports (checkpoint restore/delete)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to s3drive exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


# S3 answers 403 both for bad credentials and for policy denials.
_CREDENTIAL_ERROR_CODES: tuple[str, ...] = (
    "InvalidAccessKeyId",
    "SignatureDoesNotMatch",
    "ExpiredToken",
    "InvalidToken",
    "TokenRefreshRequired",
)

_THROTTLE_ERROR_CODES: tuple[str, ...] = (
    "SlowDown",
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "TooManyRequests",
)


def _is_credential_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return reason in _CREDENTIAL_ERROR_CODES


def _is_throttle_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return reason in _THROTTLE_ERROR_CODES


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> S3DriveError:
    """
    Map an HTTP error reported by the object store to an s3drive exception.

    Policy:
        - throttling codes (SlowDown, ...) or 429 -> RateLimitError
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> AuthError for credential codes, PermissionError otherwise
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 5xx -> ApiError
        - otherwise -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 429 or _is_throttle_reason(info.reason):
        return RateLimitError(message, details=details, cause=cause)
    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if _is_credential_reason(info.reason):
            return AuthError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if 500 <= info.status_code <= 599:
        return ApiError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
