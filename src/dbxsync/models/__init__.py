"""Public model exports for dbxsync."""

from __future__ import annotations

from .documents import (
    ContainerDocument,
    ContentDocument,
    DeleteInstruction,
    Descriptor,
    DocumentResult,
    EnumerationResult,
    IdsResult,
    Reader,
)
from .identity import IdentityGroup, IdentityUser
from .node import MEMBER_ID_PREFIX, Node, NodeKind, file, folder, member_root
from .records import (
    Download,
    GroupRecord,
    MemberRecord,
    Page,
    SharedMember,
    SourceEntry,
)
from .results import ItemResult, ItemStatus, TraversalReport
from .sharing import SharingInfo

__all__ = [
    "MEMBER_ID_PREFIX",
    "Node",
    "NodeKind",
    "member_root",
    "folder",
    "file",
    "Page",
    "MemberRecord",
    "GroupRecord",
    "SourceEntry",
    "SharedMember",
    "Download",
    "SharingInfo",
    "Reader",
    "Descriptor",
    "ContainerDocument",
    "ContentDocument",
    "DeleteInstruction",
    "DocumentResult",
    "EnumerationResult",
    "IdsResult",
    "IdentityUser",
    "IdentityGroup",
    "ItemStatus",
    "ItemResult",
    "TraversalReport",
]
