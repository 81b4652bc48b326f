"""Internal controller exports for dbxsync."""

from __future__ import annotations

from .dropbox_controller import DropboxMemberController, DropboxTeamController

__all__ = ["DropboxTeamController", "DropboxMemberController"]
