"""Public error exports for dbxsync."""

from __future__ import annotations

from .exceptions import (
    ApiError,
    AssemblyError,
    AuthError,
    ConfigurationError,
    DbxSyncError,
    DecodeError,
    EnumerationError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    SharingResolutionError,
    TransportError,
    TraversalError,
    map_http_error,
)

__all__ = [
    "DbxSyncError",
    "ConfigurationError",
    "TransportError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "RateLimitError",
    "NetworkError",
    "ApiError",
    "DecodeError",
    "SharingResolutionError",
    "TraversalError",
    "EnumerationError",
    "AssemblyError",
    "HttpErrorInfo",
    "map_http_error",
]
