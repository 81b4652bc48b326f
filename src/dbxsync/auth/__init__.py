"""Public auth exports for dbxsync."""

from __future__ import annotations

from .clients import CLOUD_SEARCH_SCOPES, DropboxClientFactory, ServiceAccountClient
from .credential import DropboxCredential

__all__ = [
    "DropboxCredential",
    "DropboxClientFactory",
    "ServiceAccountClient",
    "CLOUD_SEARCH_SCOPES",
]
