"""Host-facing repositories: content traversal and identity mapping."""

from __future__ import annotations

import logging
from typing import AbstractSet, Optional

from dbxsync.auth import DropboxCredential
from dbxsync.config import ConnectorConfig
from dbxsync.controller import DropboxTeamController
from dbxsync.identity import IdentityMapper
from dbxsync.models import DocumentResult, IdentityGroup, IdentityUser, IdsResult
from dbxsync.source import TeamSource
from dbxsync.sync import DirectoryEnumerator, DocumentAssembler

logger = logging.getLogger(__name__)


def _team_from_config(config: ConnectorConfig) -> DropboxTeamController:
    credential = DropboxCredential.from_file(config.credential_file)
    return DropboxTeamController(credential, max_retries=config.max_retries)


class ContentRepository:
    """
    Content side of the connector.

    get_ids seeds one root per team member; get_doc materializes one item per
    call. Neither keeps state between calls.
    """

    def __init__(
        self,
        team: TeamSource,
        *,
        allow_list: AbstractSet[str] = frozenset(),
        deduplicate_readers: bool = False,
    ) -> None:
        self._team = team
        self._allow_list = frozenset(allow_list)
        self._enumerator = DirectoryEnumerator(team)
        self._assembler = DocumentAssembler(team, deduplicate_readers=deduplicate_readers)

    @classmethod
    def from_config(cls, config: ConnectorConfig) -> "ContentRepository":
        return cls(
            _team_from_config(config),
            allow_list=config.team_member_ids,
            deduplicate_readers=config.deduplicate_readers,
        )

    def get_ids(self, checkpoint: Optional[bytes] = None) -> IdsResult:
        """
        Return root descriptors for every retained team member.

        Each call is a complete enumeration, so the checkpoint is handed back
        unchanged and has_more is always False.
        """
        logger.info("Listing team members (checkpoint=%r)", checkpoint)
        result = self._enumerator.list_principals(self._allow_list)
        return IdsResult(result.descriptors, checkpoint=checkpoint, has_more=False)

    def get_doc(self, key: str, payload: bytes) -> DocumentResult:
        return self._assembler.assemble(key, payload)

    def close(self) -> None:
        close = getattr(self._team, "close", None)
        if callable(close):
            close()


class IdentityRepository:
    """Identity side of the connector: user and group mappings."""

    def __init__(self, team: TeamSource) -> None:
        self._team = team
        self._mapper = IdentityMapper(team)

    @classmethod
    def from_config(cls, config: ConnectorConfig) -> "IdentityRepository":
        return cls(_team_from_config(config))

    def list_users(self) -> list[IdentityUser]:
        users = self._mapper.list_users()
        logger.info("Mapped %d users", len(users))
        return users

    def list_groups(self) -> list[IdentityGroup]:
        groups = self._mapper.list_groups()
        logger.info("Mapped %d groups", len(groups))
        return groups

    def close(self) -> None:
        close = getattr(self._team, "close", None)
        if callable(close):
            close()
