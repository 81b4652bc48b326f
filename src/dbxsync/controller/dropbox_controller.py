"""Dropbox team API controller (internal use only)."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

import requests
from dropbox import exceptions as dbx_exceptions
from dropbox.files import FileMetadata, FolderMetadata
from dropbox.team import GroupSelector

from dbxsync.auth import DropboxClientFactory, DropboxCredential
from dbxsync.errors import (
    ApiError,
    HttpErrorInfo,
    NetworkError,
    RateLimitError,
    TransportError,
    map_http_error,
)
from dbxsync.models import (
    Download,
    GroupRecord,
    MemberRecord,
    Page,
    SharedMember,
    SourceEntry,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class _RetryPolicy:
    max_retries: int = 3
    initial_delay_sec: float = 1.0


class _Executor:
    """Runs SDK calls, mapping failures to dbxsync errors and retrying transient ones."""

    _retry_policy: _RetryPolicy

    def _execute(self, func: Callable[[], T]) -> T:
        delay = self._retry_policy.initial_delay_sec
        for attempt in range(self._retry_policy.max_retries + 1):
            try:
                return func()
            except Exception as exc:
                mapped = _map_exception(exc)
                if _should_retry(mapped) and attempt < self._retry_policy.max_retries:
                    wait = _retry_delay(mapped, delay)
                    logger.debug(
                        "Retrying after %s (attempt %d, %.1fs)",
                        type(mapped).__name__,
                        attempt + 1,
                        wait,
                    )
                    time.sleep(wait)
                    delay *= 2
                    continue
                raise mapped from exc

        raise ApiError("Unexpected retry loop termination")


class DropboxTeamController(_Executor):
    """
    Team-wide Dropbox calls (internal only).

    Notes:
        - Every listing returns one page; callers drain with the page cursor.
        - The DropboxTeam client is NOT exposed.
    """

    def __init__(
        self,
        credential: DropboxCredential,
        *,
        max_retries: int = 3,
        timeout: Optional[float] = None,
    ) -> None:
        self._retry_policy = _RetryPolicy(max_retries=max_retries)
        self._team = DropboxClientFactory(credential).build_team_client(timeout=timeout)

    @classmethod
    def from_client(cls, team: Any, *, max_retries: int = 3) -> "DropboxTeamController":
        """Create controller from a pre-built DropboxTeam client (useful for tests)."""
        obj = cls.__new__(cls)
        obj._retry_policy = _RetryPolicy(max_retries=max_retries)
        obj._team = team
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def list_team_members(self, cursor: Optional[str] = None) -> Page[MemberRecord]:
        if cursor is None:
            result = self._execute(lambda: self._team.team_members_list())
        else:
            result = self._execute(lambda: self._team.team_members_list_continue(cursor))
        return Page(
            [_profile_to_member(m.profile) for m in result.members],
            _next_cursor(result),
        )

    def list_groups(self, cursor: Optional[str] = None) -> Page[GroupRecord]:
        if cursor is None:
            result = self._execute(lambda: self._team.team_groups_list())
        else:
            result = self._execute(lambda: self._team.team_groups_list_continue(cursor))
        return Page(
            [GroupRecord(group_id=g.group_id, group_name=g.group_name) for g in result.groups],
            _next_cursor(result),
        )

    def list_group_members(
        self,
        group_id: str,
        cursor: Optional[str] = None,
    ) -> Page[MemberRecord]:
        if cursor is None:
            selector = GroupSelector.group_id(group_id)
            result = self._execute(lambda: self._team.team_groups_members_list(selector))
        else:
            result = self._execute(
                lambda: self._team.team_groups_members_list_continue(cursor)
            )
        return Page(
            [_profile_to_member(m.profile) for m in result.members],
            _next_cursor(result),
        )

    def as_member(self, member_id: str) -> "DropboxMemberController":
        return DropboxMemberController(self._team.as_user(member_id), self._retry_policy)


class DropboxMemberController(_Executor):
    """Dropbox calls made as one team member (internal only)."""

    def __init__(self, client: Any, retry_policy: Optional[_RetryPolicy] = None) -> None:
        self._client = client
        self._retry_policy = retry_policy or _RetryPolicy()

    def list_folder(self, path: str, cursor: Optional[str] = None) -> Page[SourceEntry]:
        if cursor is None:
            result = self._execute(
                lambda: self._client.files_list_folder(
                    path,
                    include_has_explicit_shared_members=True,
                )
            )
        else:
            result = self._execute(lambda: self._client.files_list_folder_continue(cursor))
        return Page([_metadata_to_entry(e) for e in result.entries], _next_cursor(result))

    def list_container_members(
        self,
        container_id: str,
        cursor: Optional[str] = None,
    ) -> Page[SharedMember]:
        if cursor is None:
            result = self._execute(
                lambda: self._client.sharing_list_folder_members(container_id)
            )
        else:
            result = self._execute(
                lambda: self._client.sharing_list_folder_members_continue(cursor)
            )
        return Page(_membership_to_shared_members(result), result.cursor or None)

    def list_file_members(self, path: str, cursor: Optional[str] = None) -> Page[SharedMember]:
        if cursor is None:
            result = self._execute(lambda: self._client.sharing_list_file_members(path))
        else:
            result = self._execute(
                lambda: self._client.sharing_list_file_members_continue(cursor)
            )
        return Page(_membership_to_shared_members(result), result.cursor or None)

    def download_file(self, path: str) -> Download:
        _, response = self._execute(lambda: self._client.files_download(path))
        try:
            content = response.content
            content_type = response.headers.get("Content-Type")
        finally:
            response.close()
        return Download(content_type=content_type, content=content)


# ----------------------------
# Conversions
# ----------------------------
def _next_cursor(result: Any) -> Optional[str]:
    """Cursor for has_more-style results (member, group and folder listings)."""
    if not getattr(result, "has_more", False):
        return None
    return result.cursor or None


def _profile_to_member(profile: Any) -> MemberRecord:
    name = getattr(profile, "name", None)
    display_name = getattr(name, "display_name", None) or ""
    return MemberRecord(
        member_id=profile.team_member_id or "",
        display_name=display_name,
        email=profile.email or None,
    )


def _metadata_to_entry(entry: Any) -> SourceEntry:
    if isinstance(entry, FolderMetadata):
        sharing = entry.sharing_info
        return SourceEntry(
            kind="folder",
            name=entry.name,
            path_display=entry.path_display or "",
            path_lower=entry.path_lower or "",
            id=entry.id,
            shared_folder_id=entry.shared_folder_id,
            parent_shared_folder_id=sharing.parent_shared_folder_id if sharing else None,
        )

    if isinstance(entry, FileMetadata):
        sharing = entry.sharing_info
        return SourceEntry(
            kind="file",
            name=entry.name,
            path_display=entry.path_display or "",
            path_lower=entry.path_lower or "",
            id=entry.id,
            parent_shared_folder_id=sharing.parent_shared_folder_id if sharing else None,
            is_downloadable=bool(entry.is_downloadable),
            server_modified=entry.server_modified,
            client_modified=entry.client_modified,
            content_hash=entry.content_hash,
            rev=entry.rev,
            size=entry.size or 0,
            has_explicit_shared_members=entry.has_explicit_shared_members,
        )

    return SourceEntry(
        kind="other",
        name=getattr(entry, "name", ""),
        path_display=getattr(entry, "path_display", None) or "",
        path_lower=getattr(entry, "path_lower", None) or "",
    )


def _membership_to_shared_members(result: Any) -> list[SharedMember]:
    members: list[SharedMember] = []
    for user_member in result.users:
        member_id = user_member.user.team_member_id
        if not member_id:
            # Users outside the team have no team member id to put in an ACL.
            logger.debug("Skipping non-team user %s", user_member.user.account_id)
            continue
        members.append(SharedMember.user(member_id))
    for group_member in result.groups:
        members.append(SharedMember.group(group_member.group.group_name))
    return members


# ----------------------------
# Errors
# ----------------------------
def _should_retry(exc: Exception) -> bool:
    if isinstance(exc, RateLimitError):
        return True
    if isinstance(exc, NetworkError):
        return True
    if isinstance(exc, ApiError):
        status_code = getattr(exc, "details", {}).get("status_code")
        return isinstance(status_code, int) and 500 <= status_code <= 599
    return False


def _retry_delay(exc: Exception, default: float) -> float:
    if isinstance(exc, RateLimitError) and exc.backoff is not None:
        return exc.backoff
    return default


def _map_exception(exc: Exception) -> TransportError:
    if isinstance(exc, dbx_exceptions.RateLimitError):
        return map_http_error(
            HttpErrorInfo(
                status_code=429,
                reason=str(exc.error) if exc.error is not None else None,
                message="Dropbox rate limit reached",
                details={"backoff": exc.backoff},
            ),
            cause=exc,
        )

    if isinstance(exc, dbx_exceptions.AuthError):
        return map_http_error(
            HttpErrorInfo(status_code=401, reason=str(exc.error), message="Dropbox auth failed"),
            cause=exc,
        )

    if isinstance(exc, dbx_exceptions.BadInputError):
        return map_http_error(
            HttpErrorInfo(status_code=400, message=exc.message or "Dropbox bad input"),
            cause=exc,
        )

    if isinstance(exc, dbx_exceptions.HttpError):
        status_code = exc.status_code if isinstance(exc.status_code, int) else 0
        return map_http_error(HttpErrorInfo(status_code=status_code), cause=exc)

    if isinstance(exc, dbx_exceptions.ApiError):
        return map_http_error(
            HttpErrorInfo(
                status_code=409,
                reason=str(exc.error),
                message=str(exc.user_message_text or exc.error),
                details={"request_id": exc.request_id},
            ),
            cause=exc,
        )

    if isinstance(exc, (requests.exceptions.RequestException, OSError, TimeoutError)):
        return NetworkError("Network error", cause=exc)

    return ApiError("Dropbox API error", cause=exc)
