"""Exception hierarchy and HTTP error mapping for dbxsync."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class DbxSyncError(Exception):
    """
    Base exception for dbxsync.

    Attributes:
        details: Optional structured information (e.g., HTTP status, item key).
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


class ConfigurationError(DbxSyncError):
    """Raised when configuration or credential files are missing or invalid."""


class TransportError(DbxSyncError):
    """
    Raised when the Dropbox API cannot be reached or rejects a request.

    Transport errors are retryable: the engine surfaces them to the host
    unchanged and the host decides when to try the item again.
    """

    retryable: bool = True


class AuthError(TransportError):
    """Raised when Dropbox rejects the credential (HTTP 401)."""


class PermissionError(TransportError):
    """Raised when access is denied (HTTP 403)."""


class InvalidArgumentError(TransportError):
    """Raised when request arguments are invalid (HTTP 400)."""


class NotFoundError(TransportError):
    """Raised when a path, member or shared folder does not exist."""


class RateLimitError(TransportError):
    """Raised when rate-limited (HTTP 429)."""

    @property
    def backoff(self) -> Optional[float]:
        """Seconds Dropbox asked the caller to wait, when it said so."""
        value = self.details.get("backoff")
        return float(value) if isinstance(value, (int, float)) else None


class NetworkError(TransportError):
    """Raised when network/timeout issues prevent the request."""


class ApiError(TransportError):
    """Raised for unclassified API errors (5xx, endpoint errors, unknown 4xx)."""


class DecodeError(DbxSyncError):
    """Raised when an item payload cannot be decoded into a Node."""


class SharingResolutionError(DbxSyncError):
    """Raised when shared folder or file membership cannot be fully listed."""


class TraversalError(DbxSyncError):
    """Raised when a folder listing cannot be fully drained."""


class EnumerationError(DbxSyncError):
    """Raised when the team member listing cannot be fully drained."""


class AssemblyError(DbxSyncError):
    """Raised when a single item cannot be turned into a document."""

    def __init__(
        self,
        key: str,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        merged = {"key": key}
        if details:
            merged.update(details)
        super().__init__(f"{message}: {key}", details=merged, cause=cause)
        self.key = key


@dataclass(frozen=True)
class HttpErrorInfo:
    """Lightweight HTTP error information for mapping to dbxsync exceptions."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None


_NOT_FOUND_REASON_KEYWORDS: tuple[str, ...] = (
    "not_found",
    "invalid_shared_folder",
    "invalid_file",
    "id_not_found",
    "member_not_found",
)


def _is_not_found_reason(reason: str | None) -> bool:
    if not reason:
        return False
    return any(key in reason.lower() for key in _NOT_FOUND_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> TransportError:
    """
    Map an HTTP error to a dbxsync exception.

    Policy:
        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> PermissionError
        - 404 -> NotFoundError
        - 409 -> NotFoundError for lookup failures, otherwise ApiError
        - 429 -> RateLimitError
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

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code == 409:
        if _is_not_found_reason(info.reason):
            return NotFoundError(message, details=details, cause=cause)
        return ApiError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)
    if 500 <= info.status_code <= 599:
        return ApiError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
