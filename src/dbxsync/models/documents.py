"""Host-facing results: descriptors, documents and delete instructions."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Literal, Optional, Union

ReaderKind = Literal["user", "group"]


@dataclass(frozen=True, slots=True)
class Reader:
    """An ACL entry: a user (team member id) or a group (group name)."""

    kind: ReaderKind
    name: str

    @classmethod
    def user(cls, member_id: str) -> "Reader":
        return cls("user", member_id)

    @classmethod
    def group(cls, group_name: str) -> "Reader":
        return cls("group", group_name)


@dataclass(frozen=True, slots=True)
class Descriptor:
    """A discovered item: external key plus the opaque payload to re-request it."""

    key: str
    payload: bytes


@dataclass(frozen=True, slots=True)
class ContainerDocument:
    """A member root or folder, with the children discovered one level below it."""

    key: str
    title: str
    acl: tuple[Reader, ...]
    payload: bytes
    children: dict[str, bytes] = field(default_factory=dict)
    url: Optional[str] = None


@dataclass(frozen=True, slots=True)
class ContentDocument:
    """A file. `content` is None when the file is not downloadable."""

    key: str
    title: str
    acl: tuple[Reader, ...]
    payload: bytes
    modified: datetime
    content: Optional[bytes] = None
    content_type: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True, slots=True)
class DeleteInstruction:
    """Tells the host to drop the item from the index."""

    key: str
    reason: str


DocumentResult = Union[ContainerDocument, ContentDocument, DeleteInstruction]


@dataclass(frozen=True, slots=True)
class EnumerationResult:
    """Root descriptors for every retained team member."""

    descriptors: list[Descriptor] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.descriptors)


@dataclass(frozen=True, slots=True)
class IdsResult:
    """Output of one get_ids call. The checkpoint is host-owned and opaque."""

    descriptors: list[Descriptor]
    checkpoint: Optional[bytes] = None
    has_more: bool = False
