"""Team member enumeration: one root descriptor per member."""

from __future__ import annotations

import logging
from typing import AbstractSet

from dbxsync import state
from dbxsync.errors import EnumerationError, TransportError
from dbxsync.models import Descriptor, EnumerationResult, member_root
from dbxsync.source import TeamSource

from .pagination import drain
from .walker import item_key

logger = logging.getLogger(__name__)


class DirectoryEnumerator:
    def __init__(self, source: TeamSource) -> None:
        self._source = source

    def list_principals(self, allow_list: AbstractSet[str] = frozenset()) -> EnumerationResult:
        """
        Emit a root descriptor for every team member.

        Members without an id or display name are skipped. When allow_list is
        non-empty, members whose id is not in it are skipped too.
        """
        try:
            members = drain(self._source.list_team_members)
        except TransportError as exc:
            raise EnumerationError("Failed to list team members", cause=exc) from exc

        descriptors: list[Descriptor] = []
        seen_names: dict[str, str] = {}
        for member in members:
            if not member.is_usable:
                logger.warning("Skipping unusable member: %s", member)
                continue
            if allow_list and member.member_id not in allow_list:
                logger.debug("Skipping member not in allow-list: %s", member.member_id)
                continue
            other = seen_names.setdefault(member.display_name, member.member_id)
            if other != member.member_id:
                # Keys derive from display names; both members share one key space.
                logger.warning(
                    "Members %s and %s share the display name %r",
                    other,
                    member.member_id,
                    member.display_name,
                )
            node = member_root(member.member_id, member.display_name)
            descriptors.append(Descriptor(item_key(member.display_name), state.encode(node)))

        logger.info("Enumerated %d of %d team members", len(descriptors), len(members))
        return EnumerationResult(descriptors)
