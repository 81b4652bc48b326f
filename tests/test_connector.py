import unittest
from datetime import datetime, timezone
from unittest.mock import Mock, patch

from dbxsync.config import ConnectorConfig
from dbxsync.connector import Connector
from dbxsync.errors import ApiError, AssemblyError, ConfigurationError, NetworkError
from dbxsync.index import QueuedItem
from dbxsync.models import (
    ContainerDocument,
    ContentDocument,
    DeleteInstruction,
    Descriptor,
    IdsResult,
)


class FakeIndex:
    """In-memory queue that hands items back in push order."""

    def __init__(self) -> None:
        self.queue: list[QueuedItem] = []
        self.indexed: list[str] = []
        self.deleted: list[str] = []
        self.errors: list[str] = []

    def push(self, key: str, payload: bytes) -> None:
        self.queue.append(QueuedItem(key, payload))

    def push_error(self, key: str, message: str) -> None:
        self.errors.append(key)

    def poll(self, limit: int = 100) -> list[QueuedItem]:
        batch, self.queue = self.queue[:limit], self.queue[limit:]
        return batch

    def index(self, document) -> None:
        self.indexed.append(document.key)

    def delete(self, key: str) -> None:
        self.deleted.append(key)


def _content(key: str) -> ContentDocument:
    return ContentDocument(
        key=key,
        title=key,
        acl=(),
        payload=b"{}",
        modified=datetime(2021, 1, 1, tzinfo=timezone.utc),
    )


class TestConnector(unittest.TestCase):
    def _repository(self, docs) -> Mock:
        repo = Mock()
        repo.get_ids.return_value = IdsResult([Descriptor("Jane", b"root")])

        def get_doc(key, payload):
            doc = docs[key]
            if isinstance(doc, Exception):
                raise doc
            return doc

        repo.get_doc.side_effect = get_doc
        return repo

    def test_full_traversal_walks_children(self) -> None:
        docs = {
            "Jane": ContainerDocument(
                key="Jane",
                title="Jane",
                acl=(),
                payload=b"root",
                children={"Jane/a.txt": b"a", "Jane/old": b"old", "Jane/sub": b"sub"},
            ),
            "Jane/a.txt": _content("Jane/a.txt"),
            "Jane/old": DeleteInstruction("Jane/old", "invalid state"),
            "Jane/sub": ContainerDocument(
                key="Jane/sub",
                title="sub",
                acl=(),
                payload=b"sub",
                children={"Jane/sub/b.txt": b"b"},
            ),
            "Jane/sub/b.txt": _content("Jane/sub/b.txt"),
        }
        index = FakeIndex()

        report = Connector(self._repository(docs), index, poll_limit=2).run_full_traversal()

        self.assertEqual(report.roots, 1)
        self.assertEqual(report.summary, {"indexed": 4, "deleted": 1, "failed": 0})
        self.assertEqual(
            sorted(index.indexed),
            ["Jane", "Jane/a.txt", "Jane/sub", "Jane/sub/b.txt"],
        )
        self.assertEqual(index.deleted, ["Jane/old"])
        self.assertEqual(report.results[0].children, 3)

    def test_failed_item_does_not_stop_traversal(self) -> None:
        docs = {
            "Jane": ContainerDocument(
                key="Jane",
                title="Jane",
                acl=(),
                payload=b"root",
                children={"Jane/x": b"x", "Jane/y": b"y"},
            ),
            "Jane/x": AssemblyError("Jane/x", "Failed to assemble item", cause=ApiError("boom")),
            "Jane/y": _content("Jane/y"),
        }
        index = FakeIndex()

        with self.assertLogs("dbxsync.connector", level="WARNING"):
            report = Connector(self._repository(docs), index).run_full_traversal()

        self.assertEqual(report.failed_keys, ["Jane/x"])
        self.assertIn("Jane/y", index.indexed)
        self.assertEqual(index.errors, ["Jane/x"])
        failed = report.results[1]
        self.assertEqual(failed.error_type, "AssemblyError")
        self.assertEqual(failed.error_details["key"], "Jane/x")

    def test_index_failure_is_reported(self) -> None:
        docs = {"Jane": _content("Jane")}
        index = FakeIndex()
        index.index = Mock(side_effect=NetworkError("down"))

        with self.assertLogs("dbxsync.connector", level="WARNING"):
            report = Connector(self._repository(docs), index).run_full_traversal()

        self.assertEqual(report.failed_keys, ["Jane"])
        self.assertEqual(report.results[0].error_type, "NetworkError")

    def test_error_marking_failure_is_logged(self) -> None:
        docs = {"Jane": AssemblyError("Jane", "Failed to assemble item")}
        index = FakeIndex()
        index.push_error = Mock(side_effect=ApiError("boom"))

        with self.assertLogs("dbxsync.connector", level="WARNING") as logs:
            report = Connector(self._repository(docs), index).run_full_traversal()

        self.assertEqual(report.failed_keys, ["Jane"])
        self.assertTrue(any("repository error" in line for line in logs.output))

    def test_root_push_failure_does_not_stop_traversal(self) -> None:
        repo = Mock()
        repo.get_ids.return_value = IdsResult(
            [Descriptor("Bad", b"bad"), Descriptor("Jane", b"root")]
        )
        repo.get_doc.return_value = _content("Jane")
        index = FakeIndex()
        push = index.push

        def push_or_fail(key, payload):
            if key == "Bad":
                raise ApiError("rejected")
            push(key, payload)

        index.push = push_or_fail

        with self.assertLogs("dbxsync.connector", level="WARNING"):
            report = Connector(repo, index).run_full_traversal()

        self.assertEqual(report.roots, 2)
        self.assertEqual(report.failed_keys, ["Bad"])
        self.assertEqual(report.results[0].error_type, "ApiError")
        self.assertEqual(index.indexed, ["Jane"])

    def test_close_closes_repository(self) -> None:
        repo = Mock()
        Connector(repo, FakeIndex()).close()
        repo.close.assert_called_once()

    def test_from_config_requires_indexing_settings(self) -> None:
        with self.assertRaises(ConfigurationError):
            Connector.from_config(ConnectorConfig(credential_file="cred.json"))

    @patch("dbxsync.connector.ContentRepository.from_config")
    @patch("dbxsync.connector.ServiceAccountClient")
    def test_from_config(self, client_cls: Mock, repo_from_config: Mock) -> None:
        config = ConnectorConfig(
            credential_file="cred.json",
            service_account_file="key.json",
            source_id="src1",
            identity_source_id="ids1",
        )

        connector = Connector.from_config(config)

        self.assertIsInstance(connector, Connector)
        client_cls.assert_called_once_with("key.json")
        repo_from_config.assert_called_once_with(config)


if __name__ == "__main__":
    unittest.main()
