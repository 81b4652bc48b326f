"""Connector configuration loaded from a key=value properties file."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Optional

from dotenv import dotenv_values

from dbxsync.errors import ConfigurationError

CREDENTIAL_FILE = "dropbox.credentialFile"
TEAM_MEMBER_IDS = "dropbox.teamMemberIds"
DEDUPLICATE_READERS = "dropbox.deduplicateReaders"
MAX_RETRIES = "dropbox.maxRetries"
SERVICE_ACCOUNT_FILE = "api.serviceAccountPrivateKeyFile"
SOURCE_ID = "api.sourceId"
IDENTITY_SOURCE_ID = "api.identitySourceId"

_TRUE_VALUES = {"true", "yes", "1", "on"}
_FALSE_VALUES = {"false", "no", "0", "off", ""}


@dataclass(slots=True, frozen=True)
class ConnectorConfig:
    """
    Connector settings.

    credential_file is always required. The api.* settings are required
    only when items are written to Cloud Search; see require_indexing().
    """

    credential_file: str
    team_member_ids: frozenset[str] = field(default_factory=frozenset)
    deduplicate_readers: bool = False
    max_retries: int = 3
    service_account_file: Optional[str] = None
    source_id: Optional[str] = None
    identity_source_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.credential_file, str) or not self.credential_file.strip():
            raise ConfigurationError("credentialFile can not be empty")
        if isinstance(self.max_retries, bool) or not isinstance(self.max_retries, int):
            raise ConfigurationError("maxRetries must be an integer")
        if self.max_retries < 0:
            raise ConfigurationError("maxRetries can not be negative")

    def require_indexing(self) -> None:
        """Raise ConfigurationError unless Cloud Search settings are present."""
        missing = [
            key
            for key, value in (
                (SERVICE_ACCOUNT_FILE, self.service_account_file),
                (SOURCE_ID, self.source_id),
                (IDENTITY_SOURCE_ID, self.identity_source_id),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                "Missing Cloud Search configuration",
                details={"missing": missing},
            )

    @classmethod
    def from_mapping(cls, values: Mapping[str, Optional[str]]) -> "ConnectorConfig":
        return cls(
            credential_file=(values.get(CREDENTIAL_FILE) or "").strip(),
            team_member_ids=_parse_multi(values.get(TEAM_MEMBER_IDS)),
            deduplicate_readers=_parse_bool(DEDUPLICATE_READERS, values.get(DEDUPLICATE_READERS)),
            max_retries=_parse_int(MAX_RETRIES, values.get(MAX_RETRIES), default=3),
            service_account_file=_optional(values.get(SERVICE_ACCOUNT_FILE)),
            source_id=_optional(values.get(SOURCE_ID)),
            identity_source_id=_optional(values.get(IDENTITY_SOURCE_ID)),
        )


def load_config(path: str) -> ConnectorConfig:
    """
    Load configuration from a properties file.

    Raises:
        ConfigurationError: the file is missing or a value is invalid.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            values = dotenv_values(stream=f)
    except OSError as exc:
        raise ConfigurationError(
            "Failed to read configuration file",
            details={"config_file": path},
            cause=exc,
        ) from exc
    return ConnectorConfig.from_mapping(values)


def _optional(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _parse_multi(value: Optional[str]) -> frozenset[str]:
    if not value:
        return frozenset()
    return frozenset(part.strip() for part in value.split(",") if part.strip())


def _parse_bool(key: str, value: Optional[str]) -> bool:
    if value is None:
        return False
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{key} must be true or false", details={"value": value})


def _parse_int(key: str, value: Optional[str], *, default: int) -> int:
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ConfigurationError(
            f"{key} must be an integer",
            details={"value": value},
            cause=exc,
        ) from exc
