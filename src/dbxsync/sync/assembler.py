"""Turns an item payload into a document, or into a delete instruction."""

from __future__ import annotations

import logging
from typing import Iterable
from urllib.parse import quote

from dbxsync import state
from dbxsync.errors import (
    AssemblyError,
    DecodeError,
    SharingResolutionError,
    TransportError,
    TraversalError,
)
from dbxsync.models import (
    ContainerDocument,
    ContentDocument,
    DeleteInstruction,
    DocumentResult,
    MemberRecord,
    Node,
    NodeKind,
    Reader,
    SharingInfo,
)
from dbxsync.source import MemberSource, TeamSource
from dbxsync.util.mime import resolve_content_type
from dbxsync.util.path import basename

from .sharing import SharingResolver
from .walker import TreeWalker

logger = logging.getLogger(__name__)

VIEW_URL_PREFIX: str = "https://www.dropbox.com/home"


class DocumentAssembler:
    """
    Materialize one item per call.

    Undecodable or invalid payloads become delete instructions without any
    call to Dropbox. Everything else is resolved against the owning member's
    view of Dropbox; any failure along the way is raised as AssemblyError
    for that item only.
    """

    def __init__(self, team: TeamSource, *, deduplicate_readers: bool = False) -> None:
        self._team = team
        self._deduplicate_readers = deduplicate_readers

    def assemble(self, key: str, payload: bytes) -> DocumentResult:
        try:
            node = state.decode(payload)
        except DecodeError as exc:
            logger.info("Deleting %s: undecodable payload (%s)", key, exc)
            return DeleteInstruction(key, "undecodable payload")

        if not state.is_valid(node):
            logger.info("Deleting %s: invalid %s state", key, node.kind.value)
            return DeleteInstruction(key, "invalid state")

        try:
            source = self._team.as_member(node.member_id)
            return self._assemble_node(key, node, source)
        except (TransportError, SharingResolutionError, TraversalError) as exc:
            raise AssemblyError(
                key,
                "Failed to assemble item",
                details={"kind": node.kind.value, "member_id": node.member_id},
                cause=exc,
            ) from exc

    def _assemble_node(self, key: str, node: Node, source: MemberSource) -> DocumentResult:
        owner = MemberRecord(node.member_id, node.member_display_name)

        if node.kind is NodeKind.MEMBER:
            return self._container(key, node, source, (Reader.user(owner.member_id),))

        if node.kind is NodeKind.FOLDER:
            if node.is_shared_folder:
                sharing = SharingResolver(source).resolve_container(node.shared_folder_id)
                acl = self._acl(sharing)
            else:
                acl = (Reader.user(owner.member_id),)
            return self._container(key, node, source, acl)

        if node.kind is NodeKind.FILE:
            sharing = SharingResolver(source).resolve_file(node.list_path)
            return self._content(key, node, source, self._acl(sharing))

        raise AssertionError(f"unhandled node kind: {node.kind!r}")

    def _container(
        self,
        key: str,
        node: Node,
        source: MemberSource,
        acl: tuple[Reader, ...],
    ) -> ContainerDocument:
        owner = MemberRecord(node.member_id, node.member_display_name)
        children = TreeWalker(source).list_children(owner, node.list_path)
        return ContainerDocument(
            key=key,
            title=_title(node),
            acl=acl,
            payload=state.encode(node),
            children={child.key: child.payload for child in children},
            url=_view_url(node),
        )

    def _content(
        self,
        key: str,
        node: Node,
        source: MemberSource,
        acl: tuple[Reader, ...],
    ) -> ContentDocument:
        content = None
        content_type = None
        if node.is_downloadable:
            download = source.download_file(node.list_path)
            content = download.content
            content_type = resolve_content_type(download.content_type, _title(node))

        return ContentDocument(
            key=key,
            title=_title(node),
            acl=acl,
            payload=state.encode(node),
            modified=node.server_modified,  # type: ignore[arg-type]
            content=content,
            content_type=content_type,
            url=_view_url(node),
        )

    def _acl(self, sharing: SharingInfo) -> tuple[Reader, ...]:
        readers: Iterable[Reader] = [
            *(Reader.user(user_id) for user_id in sharing.user_ids),
            *(Reader.group(name) for name in sharing.group_names),
        ]
        if self._deduplicate_readers:
            readers = dict.fromkeys(readers)
        return tuple(readers)


def _title(node: Node) -> str:
    if node.kind is NodeKind.MEMBER:
        return node.member_display_name
    return node.name or basename(node.path_display)


def _view_url(node: Node) -> str:
    if node.kind is NodeKind.MEMBER:
        return VIEW_URL_PREFIX
    return VIEW_URL_PREFIX + quote(node.path_display)
