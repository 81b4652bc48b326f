"""Identity mappings produced for the identity source."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class IdentityUser:
    """Maps a Google identity (email) to a Dropbox team member id."""

    email: str
    external_id: str


@dataclass(frozen=True, slots=True)
class IdentityGroup:
    group_name: str
    member_emails: frozenset[str]
