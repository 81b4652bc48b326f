"""dbxsync public API."""

from __future__ import annotations

from dbxsync.auth import DropboxClientFactory, DropboxCredential, ServiceAccountClient
from dbxsync.config import ConnectorConfig, load_config
from dbxsync.connector import Connector
from dbxsync.controller import DropboxTeamController
from dbxsync.errors import (
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
from dbxsync.index import CloudSearchIndex
from dbxsync.models import (
    ContainerDocument,
    ContentDocument,
    DeleteInstruction,
    Descriptor,
    Node,
    NodeKind,
    Reader,
    SharingInfo,
    TraversalReport,
)
from dbxsync.repository import ContentRepository, IdentityRepository
from dbxsync.sync import (
    DirectoryEnumerator,
    DocumentAssembler,
    SharingResolver,
    TreeWalker,
)

__all__ = [
    # High-level
    "Connector",
    "ContentRepository",
    "IdentityRepository",
    "CloudSearchIndex",
    "DropboxTeamController",
    # Engine
    "DirectoryEnumerator",
    "DocumentAssembler",
    "SharingResolver",
    "TreeWalker",
    # Config / Auth
    "ConnectorConfig",
    "load_config",
    "DropboxCredential",
    "DropboxClientFactory",
    "ServiceAccountClient",
    # Models
    "Node",
    "NodeKind",
    "Descriptor",
    "Reader",
    "SharingInfo",
    "ContainerDocument",
    "ContentDocument",
    "DeleteInstruction",
    "TraversalReport",
    # Errors
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
