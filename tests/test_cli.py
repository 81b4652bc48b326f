import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest.mock import Mock, patch

from dbxsync.cli import EXIT_CONFIG, EXIT_FAILED, EXIT_OK, build_parser, main
from dbxsync.errors import EnumerationError
from dbxsync.models import IdentityGroup, IdentityUser, TraversalReport


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = os.path.join(self._tmp.name, "connector.properties")
        with open(self.config_path, "w", encoding="utf-8") as f:
            f.write("dropbox.credentialFile=cred.json\n")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_parser_upper_cases_log_level(self) -> None:
        args = build_parser().parse_args(["--config", "c", "--log-level", "debug"])
        self.assertEqual(args.log_level, "DEBUG")
        self.assertFalse(args.identity)

    def test_missing_config_file(self) -> None:
        code = main(["--config", os.path.join(self._tmp.name, "nope")])
        self.assertEqual(code, EXIT_CONFIG)

    def test_content_without_indexing_settings(self) -> None:
        self.assertEqual(main(["--config", self.config_path]), EXIT_CONFIG)

    @patch("dbxsync.cli.Connector.from_config")
    def test_content_run(self, from_config: Mock) -> None:
        connector = from_config.return_value
        connector.run_full_traversal.return_value = TraversalReport(roots=1)

        self.assertEqual(main(["--config", self.config_path]), EXIT_OK)
        connector.close.assert_called_once()

    @patch("dbxsync.cli.Connector.from_config")
    def test_content_run_failure(self, from_config: Mock) -> None:
        connector = from_config.return_value
        connector.run_full_traversal.side_effect = EnumerationError("boom")

        self.assertEqual(main(["--config", self.config_path]), EXIT_FAILED)
        connector.close.assert_called_once()

    @patch("dbxsync.cli.IdentityRepository.from_config")
    def test_identity_run_prints_json_lines(self, from_config: Mock) -> None:
        repo = from_config.return_value
        repo.list_users.return_value = [IdentityUser("jane@example.com", "dbmid:1")]
        repo.list_groups.return_value = [
            IdentityGroup("eng", frozenset({"b@example.com", "a@example.com"}))
        ]

        out = io.StringIO()
        with redirect_stdout(out):
            code = main(["--config", self.config_path, "--identity"])

        self.assertEqual(code, EXIT_OK)
        lines = [json.loads(line) for line in out.getvalue().splitlines()]
        self.assertEqual(
            lines,
            [
                {"type": "user", "email": "jane@example.com", "external_id": "dbmid:1"},
                {
                    "type": "group",
                    "group_name": "eng",
                    "member_emails": ["a@example.com", "b@example.com"],
                },
            ],
        )
        repo.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
