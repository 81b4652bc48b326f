"""Client factories for Dropbox and Google Cloud Search."""

from __future__ import annotations

from typing import Optional, Sequence

import dropbox
from google.oauth2 import service_account
from googleapiclient.discovery import build

from dbxsync.errors import ConfigurationError

from .credential import DropboxCredential

USER_AGENT: str = "dbxsync-connector"

CLOUD_SEARCH_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/cloud_search",)


class DropboxClientFactory:
    """Create Dropbox team clients from a credential."""

    def __init__(self, credential: DropboxCredential) -> None:
        self._credential = credential

    @classmethod
    def from_file(cls, credential_file: str) -> "DropboxClientFactory":
        return cls(DropboxCredential.from_file(credential_file))

    def build_team_client(self, *, timeout: Optional[float] = None) -> dropbox.DropboxTeam:
        """
        Build a DropboxTeam client.

        SDK-level retries are disabled; the controller owns the retry policy.
        """
        cred = self._credential
        try:
            return dropbox.DropboxTeam(
                oauth2_access_token=cred.access_token,
                oauth2_refresh_token=cred.refresh_token,
                oauth2_access_token_expiration=cred.expiration,
                app_key=cred.app_key,
                app_secret=cred.app_secret,
                max_retries_on_error=0,
                max_retries_on_rate_limit=0,
                user_agent=USER_AGENT,
                timeout=timeout,
            )
        except (AssertionError, ValueError) as exc:
            raise ConfigurationError("Failed to build Dropbox team client", cause=exc) from exc


class ServiceAccountClient:
    """Create Cloud Search API service objects from a service account key file."""

    def __init__(self, service_account_file: str) -> None:
        if not service_account_file:
            raise ConfigurationError("service_account_file must be a non-empty string")
        self._service_account_file = service_account_file

    def get_credentials(self, scopes: Sequence[str] = CLOUD_SEARCH_SCOPES):
        """
        Return service account credentials for the given scopes.

        Returns:
            google.oauth2.service_account.Credentials

        Raises:
            ConfigurationError: when the key file cannot be loaded.
        """
        try:
            return service_account.Credentials.from_service_account_file(
                self._service_account_file,
                scopes=list(scopes),
            )
        except (OSError, ValueError) as exc:
            raise ConfigurationError(
                "Failed to load service account key file",
                details={"service_account_file": self._service_account_file},
                cause=exc,
            ) from exc

    def build_cloudsearch_service(self, scopes: Sequence[str] = CLOUD_SEARCH_SCOPES):
        """
        Build a Cloud Search API service resource.

        Returns:
            googleapiclient.discovery.Resource
        """
        creds = self.get_credentials(scopes)
        try:
            return build("cloudsearch", "v1", credentials=creds, cache_discovery=False)
        except Exception as exc:
            raise ConfigurationError("Failed to build Cloud Search service", cause=exc) from exc
