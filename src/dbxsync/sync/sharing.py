"""Sharing resolution for shared folders and files."""

from __future__ import annotations

import logging

from dbxsync.errors import SharingResolutionError, TransportError
from dbxsync.models import SharedMember, SharingInfo
from dbxsync.source import MemberSource

from .pagination import drain

logger = logging.getLogger(__name__)


class SharingResolver:
    """Resolve who can read a shared folder or file, as seen by one member."""

    def __init__(self, source: MemberSource) -> None:
        self._source = source

    def resolve_container(self, container_id: str) -> SharingInfo:
        try:
            members = drain(
                lambda cursor: self._source.list_container_members(container_id, cursor)
            )
        except TransportError as exc:
            raise SharingResolutionError(
                "Failed to list shared folder members",
                details={"shared_folder_id": container_id},
                cause=exc,
            ) from exc
        return _to_sharing_info(members)

    def resolve_file(self, path: str) -> SharingInfo:
        try:
            members = drain(lambda cursor: self._source.list_file_members(path, cursor))
        except TransportError as exc:
            raise SharingResolutionError(
                "Failed to list file members",
                details={"path": path},
                cause=exc,
            ) from exc
        return _to_sharing_info(members)


def _to_sharing_info(members: list[SharedMember]) -> SharingInfo:
    user_ids: list[str] = []
    group_names: list[str] = []
    for member in members:
        if member.kind == "user":
            user_ids.append(member.name)
        elif member.kind == "group":
            group_names.append(member.name)
        else:
            raise AssertionError(f"unhandled shared member kind: {member.kind!r}")
    logger.debug("Resolved %d users and %d groups", len(user_ids), len(group_names))
    return SharingInfo.of(user_ids, group_names)
