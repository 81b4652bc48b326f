"""Google Cloud Search indexing API client (internal use only)."""

from __future__ import annotations

import base64
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, TypeVar
from urllib.parse import quote, unquote

from googleapiclient.errors import HttpError

from dbxsync.errors import (
    ApiError,
    ConfigurationError,
    HttpErrorInfo,
    NetworkError,
    map_http_error,
)
from dbxsync.models import ContainerDocument, ContentDocument, Reader
from dbxsync.util.time import now_utc, to_rfc3339

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Cloud Search rejects inline content above 100 KiB.
MAX_INLINE_CONTENT_BYTES: int = 100 * 1024

POLL_STATUS_CODES: tuple[str, ...] = ("MODIFIED", "NEW_ITEM")


@dataclass(frozen=True, slots=True)
class QueuedItem:
    """An item handed back by a poll call."""

    key: str
    payload: bytes


class CloudSearchIndex:
    """
    Writes documents to one Cloud Search data source.

    Notes:
        - Item names are derived from item keys; keys are URL-quoted.
        - ACL readers are resolved against the configured identity source.
    """

    def __init__(self, service: Any, source_id: str, identity_source_id: str) -> None:
        if not source_id:
            raise ConfigurationError("source_id must be a non-empty string")
        if not identity_source_id:
            raise ConfigurationError("identity_source_id must be a non-empty string")
        self._service = service
        self._source_id = source_id
        self._identity_source_id = identity_source_id

    # ----------------------------
    # Naming
    # ----------------------------
    @property
    def datasource_name(self) -> str:
        return f"datasources/{self._source_id}"

    def item_name(self, key: str) -> str:
        return f"{self.datasource_name}/items/{quote(key, safe='')}"

    def key_from_item_name(self, name: str) -> str:
        prefix = f"{self.datasource_name}/items/"
        if not name.startswith(prefix):
            raise ApiError("Item name outside data source", details={"name": name})
        return unquote(name[len(prefix):])

    def principal(self, reader: Reader) -> dict[str, Any]:
        base = f"identitysources/{self._identity_source_id}"
        if reader.kind == "user":
            return {"userResourceName": f"{base}/users/{quote(reader.name, safe='')}"}
        if reader.kind == "group":
            return {"groupResourceName": f"{base}/groups/{quote(reader.name, safe='')}"}
        raise AssertionError(f"unhandled reader kind: {reader.kind!r}")

    # ----------------------------
    # Public API
    # ----------------------------
    def push(self, key: str, payload: bytes) -> None:
        """Queue an item (new or changed) with its payload for a later poll."""
        body = {"item": {"type": "MODIFIED", "payload": _b64(payload)}}
        self._execute(self._items().push(name=self.item_name(key), body=body).execute)

    def push_error(self, key: str, message: str) -> None:
        body = {
            "item": {
                "type": "REPOSITORY_ERROR",
                "repositoryError": {"type": "UNKNOWN", "errorMessage": message[:1000]},
            }
        }
        self._execute(self._items().push(name=self.item_name(key), body=body).execute)

    def poll(self, limit: int = 100) -> list[QueuedItem]:
        body = {"limit": limit, "statusCodes": list(POLL_STATUS_CODES)}
        data = self._execute(
            self._items().poll(name=self.datasource_name, body=body).execute
        )
        items: list[QueuedItem] = []
        for item in data.get("items", []) or []:
            key = self.key_from_item_name(item["name"])
            payload = base64.b64decode(item.get("payload") or "")
            items.append(QueuedItem(key=key, payload=payload))
        return items

    def index(self, document: ContainerDocument | ContentDocument) -> None:
        body = {"item": self.build_item(document), "mode": "SYNCHRONOUS"}
        self._execute(
            self._items().index(name=self.item_name(document.key), body=body).execute
        )

    def delete(self, key: str) -> None:
        self._execute(
            self._items()
            .delete(name=self.item_name(key), version=_b64(_version()), mode="SYNCHRONOUS")
            .execute
        )

    def build_item(self, document: ContainerDocument | ContentDocument) -> dict[str, Any]:
        metadata: dict[str, Any] = {"title": document.title}
        if document.url:
            metadata["sourceRepositoryUrl"] = document.url

        item: dict[str, Any] = {
            "name": self.item_name(document.key),
            "version": _b64(_version()),
            "acl": {"readers": [self.principal(r) for r in document.acl]},
            "metadata": metadata,
            "payload": _b64(document.payload),
        }

        if isinstance(document, ContainerDocument):
            item["itemType"] = "CONTAINER_ITEM"
            return item

        item["itemType"] = "CONTENT_ITEM"
        metadata["updateTime"] = to_rfc3339(document.modified)
        if document.content_type:
            metadata["mimeType"] = document.content_type
        if document.content is not None:
            if len(document.content) <= MAX_INLINE_CONTENT_BYTES:
                item["content"] = {
                    "inlineContent": _b64(document.content),
                    "contentFormat": "RAW",
                }
            else:
                logger.info(
                    "Indexing %s without content (%d bytes)",
                    document.key,
                    len(document.content),
                )
        return item

    # ----------------------------
    # Internals
    # ----------------------------
    def _items(self) -> Any:
        return self._service.indexing().datasources().items()

    def _execute(self, func: Callable[[], T]) -> T:
        try:
            return func()
        except HttpError as exc:
            raise map_http_error(_http_error_to_info(exc), cause=exc) from exc
        except (OSError, TimeoutError) as exc:
            raise NetworkError("Network error", cause=exc) from exc


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _version() -> bytes:
    return str(int(now_utc().timestamp() * 1000)).encode("ascii")


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    status_code = getattr(getattr(exc, "resp", None), "status", None)
    reason = getattr(getattr(exc, "resp", None), "reason", None)

    message = None
    details: dict[str, Any] = {}

    content = getattr(exc, "content", None)
    if isinstance(content, (bytes, bytearray)):
        try:
            payload = json.loads(content.decode("utf-8"))
        except ValueError:
            payload = None
        err = payload.get("error", {}) if isinstance(payload, dict) else {}
        if isinstance(err, dict):
            message = err.get("message") or None
            errors = err.get("errors") or []
            if errors and isinstance(errors, list) and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo(
        status_code=status_code,
        reason=reason if isinstance(reason, str) else None,
        message=message,
        details=details or None,
    )

