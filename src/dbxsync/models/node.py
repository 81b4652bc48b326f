"""Node model: the per-item state carried through the indexing host."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from dbxsync.util.time import as_utc

MEMBER_ID_PREFIX: str = "dbmid:"


class NodeKind(str, Enum):
    """Closed set of node kinds. Every match site handles all three."""

    MEMBER = "member"
    FOLDER = "folder"
    FILE = "file"


@dataclass(frozen=True, slots=True)
class Node:
    """
    One entry of a member's Dropbox tree.

    MEMBER nodes are the member's root and only need the member fields.
    FOLDER and FILE nodes also carry the Dropbox metadata needed to list,
    share-resolve or download them again later.
    """

    kind: NodeKind
    member_id: str
    member_display_name: str

    id: str = ""
    name: str = ""
    path_display: str = ""
    path_lower: str = ""
    parent_shared_folder_id: str = ""
    shared_folder_id: str = ""
    client_modified: Optional[datetime] = None
    server_modified: Optional[datetime] = None
    content_hash: str = ""
    rev: str = ""
    size: int = 0
    is_downloadable: bool = False
    has_explicit_shared_members: Optional[bool] = None

    def __post_init__(self) -> None:
        # Timestamps are held in UTC; naive values are taken to be UTC already.
        for attr in ("client_modified", "server_modified"):
            value = getattr(self, attr)
            if value is not None:
                object.__setattr__(self, attr, as_utc(value))

    @property
    def is_shared_folder(self) -> bool:
        return self.kind is NodeKind.FOLDER and bool(self.shared_folder_id)

    @property
    def list_path(self) -> str:
        """Path to pass to Dropbox when listing or resolving this node."""
        if self.kind is NodeKind.MEMBER:
            return ""
        return self.path_lower or self.path_display


def member_root(member_id: str, display_name: str) -> Node:
    return Node(NodeKind.MEMBER, member_id, display_name)


def folder(
    member_id: str,
    display_name: str,
    *,
    id: str,
    name: str,
    path_display: str,
    path_lower: str,
    shared_folder_id: Optional[str] = None,
    parent_shared_folder_id: Optional[str] = None,
) -> Node:
    return Node(
        NodeKind.FOLDER,
        member_id,
        display_name,
        id=id,
        name=name,
        path_display=path_display,
        path_lower=path_lower,
        shared_folder_id=shared_folder_id or "",
        parent_shared_folder_id=parent_shared_folder_id or "",
    )


def file(
    member_id: str,
    display_name: str,
    *,
    id: str,
    name: str,
    path_display: str,
    path_lower: str,
    server_modified: Optional[datetime],
    client_modified: Optional[datetime] = None,
    is_downloadable: bool = True,
    parent_shared_folder_id: Optional[str] = None,
    content_hash: Optional[str] = None,
    rev: Optional[str] = None,
    size: int = 0,
    has_explicit_shared_members: Optional[bool] = None,
) -> Node:
    return Node(
        NodeKind.FILE,
        member_id,
        display_name,
        id=id,
        name=name,
        path_display=path_display,
        path_lower=path_lower,
        parent_shared_folder_id=parent_shared_folder_id or "",
        client_modified=client_modified,
        server_modified=server_modified,
        content_hash=content_hash or "",
        rev=rev or "",
        size=size,
        is_downloadable=is_downloadable,
        has_explicit_shared_members=has_explicit_shared_members,
    )
