"""User and group identity mapping for the identity source."""

from __future__ import annotations

import logging

from dbxsync.errors import EnumerationError, TransportError
from dbxsync.models import GroupRecord, IdentityGroup, IdentityUser, MemberRecord
from dbxsync.source import TeamSource
from dbxsync.sync.pagination import drain

logger = logging.getLogger(__name__)


def is_mappable(member: MemberRecord) -> bool:
    """A member can be mapped only when both its email and member id are known."""
    return bool(member.email) and bool(member.member_id)


class IdentityMapper:
    """
    Build identity mappings from the team listings.

    Users map their email (the index identity) to their team member id (the
    id used in item ACLs). Groups are keyed by group name, which is also how
    ACLs refer to them, and list the emails of their mappable members.
    """

    def __init__(self, source: TeamSource) -> None:
        self._source = source

    def list_users(self) -> list[IdentityUser]:
        try:
            members = drain(self._source.list_team_members)
        except TransportError as exc:
            raise EnumerationError("Failed to list team members", cause=exc) from exc

        users: list[IdentityUser] = []
        for member in members:
            if not is_mappable(member):
                logger.warning("Skipping invalid user: %s", member)
                continue
            users.append(IdentityUser(email=member.email, external_id=member.member_id))  # type: ignore[arg-type]
        return users

    def list_groups(self) -> list[IdentityGroup]:
        try:
            groups = drain(self._source.list_groups)
        except TransportError as exc:
            raise EnumerationError("Failed to list groups", cause=exc) from exc

        return [self._to_identity_group(group) for group in groups]

    def _to_identity_group(self, group: GroupRecord) -> IdentityGroup:
        try:
            members = drain(
                lambda cursor: self._source.list_group_members(group.group_id, cursor)
            )
        except TransportError as exc:
            raise EnumerationError(
                "Failed to list group members",
                details={"group_id": group.group_id},
                cause=exc,
            ) from exc

        emails = frozenset(m.email for m in members if is_mappable(m))
        return IdentityGroup(group_name=group.group_name, member_emails=emails)  # type: ignore[arg-type]
