"""Resolved sharing information for a shared folder or file."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True, slots=True)
class SharingInfo:
    """Users (team member ids) and group names with read access, in source order."""

    user_ids: tuple[str, ...] = ()
    group_names: tuple[str, ...] = ()

    @classmethod
    def of(cls, user_ids: Iterable[str], group_names: Iterable[str]) -> "SharingInfo":
        return cls(tuple(user_ids), tuple(group_names))
