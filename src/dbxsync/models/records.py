"""Source-side records returned by the Dropbox capabilities, one page at a time."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Generic, Literal, Optional, TypeVar

T = TypeVar("T")

EntryKind = Literal["folder", "file", "other"]
SharedMemberKind = Literal["user", "group"]


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """One page of a listing. `cursor` is None on the last page."""

    items: list[T] = field(default_factory=list)
    cursor: Optional[str] = None

    @property
    def has_more(self) -> bool:
        return bool(self.cursor)


@dataclass(frozen=True, slots=True)
class MemberRecord:
    """A team member as listed by the team or group endpoints."""

    member_id: str
    display_name: str
    email: Optional[str] = None

    @property
    def is_usable(self) -> bool:
        return bool(self.member_id) and bool(self.display_name)


@dataclass(frozen=True, slots=True)
class GroupRecord:
    group_id: str
    group_name: str


@dataclass(frozen=True, slots=True)
class SourceEntry:
    """One entry of a folder listing."""

    kind: EntryKind
    name: str
    path_display: str
    path_lower: str = ""
    id: str = ""
    shared_folder_id: Optional[str] = None
    parent_shared_folder_id: Optional[str] = None
    is_downloadable: bool = False
    server_modified: Optional[datetime] = None
    client_modified: Optional[datetime] = None
    content_hash: Optional[str] = None
    rev: Optional[str] = None
    size: int = 0
    has_explicit_shared_members: Optional[bool] = None


@dataclass(frozen=True, slots=True)
class SharedMember:
    """A user (by team member id) or a group (by name) with access to an item."""

    kind: SharedMemberKind
    name: str

    @classmethod
    def user(cls, member_id: str) -> "SharedMember":
        return cls("user", member_id)

    @classmethod
    def group(cls, group_name: str) -> "SharedMember":
        return cls("group", group_name)


@dataclass(frozen=True, slots=True)
class Download:
    content_type: Optional[str]
    content: bytes
