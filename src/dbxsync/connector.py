"""Connector: drives the content repository through the Cloud Search queue."""

from __future__ import annotations

import logging

from dbxsync.auth import ServiceAccountClient
from dbxsync.config import ConnectorConfig
from dbxsync.errors import AssemblyError, TransportError
from dbxsync.index import CloudSearchIndex, QueuedItem
from dbxsync.models import (
    ContainerDocument,
    ContentDocument,
    DeleteInstruction,
    ItemResult,
    TraversalReport,
)
from dbxsync.repository import ContentRepository

logger = logging.getLogger(__name__)


class Connector:
    """
    Full traversal: Roots -> Queue -> Poll -> Document -> Index.

    Policy:
        - Roots are pushed once, then the queue is polled until empty.
        - Containers push their children back onto the queue; the repository
          itself never recurses.
        - A failing item is reported and marked as a repository error; other
          items keep going.
    """

    def __init__(
        self,
        repository: ContentRepository,
        index: CloudSearchIndex,
        *,
        poll_limit: int = 100,
    ) -> None:
        self._repository = repository
        self._index = index
        self._poll_limit = poll_limit

    @classmethod
    def from_config(cls, config: ConnectorConfig) -> "Connector":
        config.require_indexing()
        service = ServiceAccountClient(
            config.service_account_file  # type: ignore[arg-type]
        ).build_cloudsearch_service()
        index = CloudSearchIndex(
            service,
            config.source_id,  # type: ignore[arg-type]
            config.identity_source_id,  # type: ignore[arg-type]
        )
        return cls(ContentRepository.from_config(config), index)

    def run_full_traversal(self) -> TraversalReport:
        ids = self._repository.get_ids()
        report = TraversalReport(roots=len(ids.descriptors))

        for descriptor in ids.descriptors:
            try:
                self._index.push(descriptor.key, descriptor.payload)
            except TransportError as exc:
                logger.warning("Failed to push root %s: %s", descriptor.key, exc)
                report.results.append(_failed(descriptor.key, exc))

        logger.info("Pushed %d member roots", report.roots - len(report.failed_keys))

        while True:
            batch = self._index.poll(self._poll_limit)
            if not batch:
                break
            for item in batch:
                report.results.append(self._process(item))

        logger.info("Traversal finished: %s", report.summary)
        return report

    def close(self) -> None:
        self._repository.close()

    # ----------------------------
    # Internals
    # ----------------------------
    def _process(self, item: QueuedItem) -> ItemResult:
        try:
            result = self._repository.get_doc(item.key, item.payload)

            if isinstance(result, DeleteInstruction):
                self._index.delete(item.key)
                return ItemResult(key=item.key, status="deleted")

            if isinstance(result, ContainerDocument):
                self._index.index(result)
                for child_key, child_payload in result.children.items():
                    self._index.push(child_key, child_payload)
                return ItemResult(key=item.key, status="indexed", children=len(result.children))

            if isinstance(result, ContentDocument):
                self._index.index(result)
                return ItemResult(key=item.key, status="indexed")

            raise AssertionError(f"unhandled document result: {result!r}")
        except (AssemblyError, TransportError) as exc:
            logger.warning("Failed to process %s: %s", item.key, exc)
            self._mark_error(item.key, exc)
            return _failed(item.key, exc)

    def _mark_error(self, key: str, exc: Exception) -> None:
        try:
            self._index.push_error(key, str(exc))
        except TransportError as push_exc:
            logger.warning("Failed to mark %s as a repository error: %s", key, push_exc)


def _failed(key: str, exc: AssemblyError | TransportError) -> ItemResult:
    return ItemResult(
        key=key,
        status="failed",
        error_type=exc.__class__.__name__,
        error_message=str(exc),
        error_details=exc.details,
    )
