"""Dropbox team credential file."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from dbxsync.errors import ConfigurationError


@dataclass(slots=True, frozen=True)
class DropboxCredential:
    """
    Dropbox Business team credential.

    Either an access token, or a refresh token together with the app key,
    must be present. `expires_at` is the access token expiry in epoch
    milliseconds, as written by the Dropbox credential tooling.
    """

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    app_key: Optional[str] = None
    app_secret: Optional[str] = None
    expires_at: Optional[int] = None

    def __post_init__(self) -> None:
        for name in ("access_token", "refresh_token", "app_key", "app_secret"):
            value = getattr(self, name)
            if value is not None and (not isinstance(value, str) or not value.strip()):
                raise ConfigurationError(f"Credential '{name}' must be a non-empty string")

        if self.expires_at is not None and (
            not isinstance(self.expires_at, int) or isinstance(self.expires_at, bool)
        ):
            raise ConfigurationError("Credential 'expires_at' must be epoch milliseconds")

        if not self.access_token and not (self.refresh_token and self.app_key):
            raise ConfigurationError(
                "Credential needs an access_token, or a refresh_token with an app_key"
            )

    @classmethod
    def from_file(cls, path: str) -> "DropboxCredential":
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            raise ConfigurationError(
                "Failed to read credential file",
                details={"credential_file": path},
                cause=exc,
            ) from exc
        if not isinstance(data, dict):
            raise ConfigurationError(
                "Credential file must hold a JSON object",
                details={"credential_file": path},
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DropboxCredential":
        return cls(
            access_token=data.get("access_token"),
            refresh_token=data.get("refresh_token"),
            app_key=data.get("app_key"),
            app_secret=data.get("app_secret"),
            expires_at=data.get("expires_at"),
        )

    @property
    def expiration(self) -> Optional[datetime]:
        """Access token expiry as a naive UTC datetime, the form the Dropbox SDK compares."""
        if self.expires_at is None:
            return None
        dt = datetime.fromtimestamp(self.expires_at / 1000, tz=timezone.utc)
        return dt.replace(tzinfo=None)
