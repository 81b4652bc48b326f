"""
Traversal state codec.

A Node travels through the indexing host as an opaque payload between the
call that discovers it and the call that materializes it. The payload is a
UTF-8 JSON object:

    {"v": 1, "kind": "file", "teamMemberId": "dbmid:...", ...}

`v` is the schema version. Decoders ignore fields they do not know, so new
optional fields can be added without breaking payloads already stored by the
host. Payloads written before `v` existed are read as version 1.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Optional

from dbxsync.errors import DecodeError
from dbxsync.models.node import MEMBER_ID_PREFIX, Node, NodeKind
from dbxsync.util.time import parse_rfc3339, to_rfc3339

logger = logging.getLogger(__name__)

SCHEMA_VERSION: int = 1

# (json key, Node attribute)
_STR_FIELDS: tuple[tuple[str, str], ...] = (
    ("id", "id"),
    ("name", "name"),
    ("pathDisplay", "path_display"),
    ("pathLower", "path_lower"),
    ("parentSharedFolderId", "parent_shared_folder_id"),
    ("sharedFolderId", "shared_folder_id"),
    ("contentHash", "content_hash"),
    ("rev", "rev"),
)
_DATETIME_FIELDS: tuple[tuple[str, str], ...] = (
    ("clientModified", "client_modified"),
    ("serverModified", "server_modified"),
)


def encode(node: Node) -> bytes:
    """Serialize a Node into its payload bytes."""
    data: dict[str, Any] = {
        "v": SCHEMA_VERSION,
        "kind": node.kind.value,
        "teamMemberId": node.member_id,
        "memberDisplayName": node.member_display_name,
    }
    for key, attr in _STR_FIELDS:
        value = getattr(node, attr)
        if value:
            data[key] = value
    for key, attr in _DATETIME_FIELDS:
        value = getattr(node, attr)
        if value is not None:
            data[key] = to_rfc3339(value)
    if node.size:
        data["size"] = node.size
    if node.is_downloadable:
        data["isDownloadable"] = True
    if node.has_explicit_shared_members is not None:
        data["hasExplicitSharedMembers"] = node.has_explicit_shared_members
    return json.dumps(data, separators=(",", ":"), sort_keys=True).encode("utf-8")


def decode(payload: bytes) -> Node:
    """
    Parse payload bytes back into a Node.

    Raises:
        DecodeError: the payload is not a JSON object of the expected shape.
            Validity (see is_valid) is a separate question.
    """
    try:
        data = json.loads(bytes(payload).decode("utf-8"))
    except (TypeError, ValueError, RecursionError) as exc:
        raise DecodeError("Payload is not UTF-8 JSON", cause=exc) from exc

    if not isinstance(data, dict):
        raise DecodeError("Payload must be a JSON object")

    logger.debug("Decoding payload %s", data)

    version = data.get("v", SCHEMA_VERSION)
    if not isinstance(version, int) or isinstance(version, bool) or version < 1:
        raise DecodeError("Unsupported payload version", details={"v": version})

    raw_kind = data.get("kind")
    try:
        kind = NodeKind(raw_kind)
    except ValueError as exc:
        raise DecodeError("Unknown node kind", details={"kind": raw_kind}, cause=exc) from exc

    values: dict[str, Any] = {
        "member_id": _get(data, "teamMemberId", str, ""),
        "member_display_name": _get(data, "memberDisplayName", str, ""),
    }
    for key, attr in _STR_FIELDS:
        values[attr] = _get(data, key, str, "")
    for key, attr in _DATETIME_FIELDS:
        values[attr] = _get_datetime(data, key)
    values["size"] = _get(data, "size", int, 0)
    values["is_downloadable"] = _get(data, "isDownloadable", bool, False)
    values["has_explicit_shared_members"] = _get(data, "hasExplicitSharedMembers", bool, None)

    return Node(kind, **values)


def is_valid(node: Node) -> bool:
    """
    Return True if the node may be materialized into a document.

    Rules:
        - member id carries the 'dbmid:' prefix
        - kind is MEMBER, FOLDER or FILE
        - member display name is non-empty
        - FOLDER and FILE nodes have a non-empty path
        - FILE nodes have a server-modified timestamp
    """
    if not node.member_id.startswith(MEMBER_ID_PREFIX):
        return False
    if not isinstance(node.kind, NodeKind):
        return False
    if not node.member_display_name:
        return False

    if node.kind is NodeKind.MEMBER:
        return True
    if node.kind is NodeKind.FOLDER:
        return bool(node.path_display)
    if node.kind is NodeKind.FILE:
        return bool(node.path_display) and node.server_modified is not None

    raise AssertionError(f"unhandled node kind: {node.kind!r}")


def _get(data: dict[str, Any], key: str, typ: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    # bool is an int subclass; keep the two apart.
    if typ is int and isinstance(value, bool):
        raise DecodeError("Invalid payload field", details={"field": key})
    if not isinstance(value, typ):
        raise DecodeError("Invalid payload field", details={"field": key})
    return value


def _get_datetime(data: dict[str, Any], key: str) -> Optional[datetime]:
    value = data.get(key)
    if value is None:
        return None
    try:
        return parse_rfc3339(value)
    except (TypeError, ValueError) as exc:
        raise DecodeError("Invalid payload timestamp", details={"field": key}, cause=exc) from exc
