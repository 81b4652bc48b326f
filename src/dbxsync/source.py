"""
Source capabilities the sync engine depends on.

Each listing call returns a single page; the engine drains pages itself by
passing back the page cursor until a page arrives without one.
"""

from __future__ import annotations

from typing import Optional, Protocol

from dbxsync.models import (
    Download,
    GroupRecord,
    MemberRecord,
    Page,
    SharedMember,
    SourceEntry,
)


class MemberSource(Protocol):
    """Calls made on behalf of one team member."""

    def list_folder(self, path: str, cursor: Optional[str] = None) -> Page[SourceEntry]:
        ...

    def list_container_members(
        self,
        container_id: str,
        cursor: Optional[str] = None,
    ) -> Page[SharedMember]:
        ...

    def list_file_members(self, path: str, cursor: Optional[str] = None) -> Page[SharedMember]:
        ...

    def download_file(self, path: str) -> Download:
        ...


class TeamSource(Protocol):
    """Team-wide calls, plus access to per-member sources."""

    def list_team_members(self, cursor: Optional[str] = None) -> Page[MemberRecord]:
        ...

    def list_groups(self, cursor: Optional[str] = None) -> Page[GroupRecord]:
        ...

    def list_group_members(
        self,
        group_id: str,
        cursor: Optional[str] = None,
    ) -> Page[MemberRecord]:
        ...

    def as_member(self, member_id: str) -> MemberSource:
        ...
