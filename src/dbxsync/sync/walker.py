"""One-level tree walking for a member's Dropbox."""

from __future__ import annotations

import logging
from typing import Optional

from dbxsync import state
from dbxsync.errors import TransportError, TraversalError
from dbxsync.models import Descriptor, MemberRecord, Node, SourceEntry, file, folder
from dbxsync.source import MemberSource
from dbxsync.util.path import join
from dbxsync.util.time import as_utc

from .pagination import drain

logger = logging.getLogger(__name__)


def item_key(display_name: str, path_display: str = "") -> str:
    """External key for an item: member display name, then the Dropbox path."""
    if not path_display:
        return display_name
    return join([display_name, path_display])


class TreeWalker:
    """
    List the immediate children of a folder and turn them into descriptors.

    The walker never descends: each child is handed back to the host, which
    asks for it separately.
    """

    def __init__(self, source: MemberSource) -> None:
        self._source = source

    def list_children(self, member: MemberRecord, path: str) -> list[Descriptor]:
        try:
            entries = drain(lambda cursor: self._source.list_folder(path, cursor))
        except TransportError as exc:
            raise TraversalError(
                "Failed to list folder",
                details={"member_id": member.member_id, "path": path},
                cause=exc,
            ) from exc

        children: list[Descriptor] = []
        for entry in entries:
            node = _entry_to_node(member, entry)
            if node is None:
                logger.debug("Skipping %s entry %s", entry.kind, entry.path_display)
                continue
            key = item_key(member.display_name, entry.path_display)
            children.append(Descriptor(key, state.encode(node)))

        logger.debug(
            "Listed %d children of %r for %s", len(children), path, member.member_id
        )
        return children


def _entry_to_node(member: MemberRecord, entry: SourceEntry) -> Optional[Node]:
    if entry.kind == "folder":
        return folder(
            member.member_id,
            member.display_name,
            id=entry.id,
            name=entry.name,
            path_display=entry.path_display,
            path_lower=entry.path_lower,
            shared_folder_id=entry.shared_folder_id,
            parent_shared_folder_id=entry.parent_shared_folder_id,
        )
    if entry.kind == "file":
        return file(
            member.member_id,
            member.display_name,
            id=entry.id,
            name=entry.name,
            path_display=entry.path_display,
            path_lower=entry.path_lower,
            server_modified=as_utc(entry.server_modified) if entry.server_modified else None,
            client_modified=as_utc(entry.client_modified) if entry.client_modified else None,
            is_downloadable=entry.is_downloadable,
            parent_shared_folder_id=entry.parent_shared_folder_id,
            content_hash=entry.content_hash,
            rev=entry.rev,
            size=entry.size,
            has_explicit_shared_members=entry.has_explicit_shared_members,
        )
    return None
