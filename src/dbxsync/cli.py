"""Command line entry point."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from typing import Optional, Sequence

from dbxsync.config import load_config
from dbxsync.connector import Connector
from dbxsync.errors import ConfigurationError, DbxSyncError
from dbxsync.repository import IdentityRepository

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dbxsync",
        description="Mirror a Dropbox Business team into Google Cloud Search.",
    )
    parser.add_argument("--config", required=True, help="connector properties file")
    parser.add_argument(
        "--identity",
        action="store_true",
        help="print user and group identity mappings instead of indexing content",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="logging level (default: INFO)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        if args.identity:
            return _run_identity(IdentityRepository.from_config(config))
        return _run_content(Connector.from_config(config))
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s %s", exc, exc.details)
        return EXIT_CONFIG
    except DbxSyncError as exc:
        logger.error("Sync failed: %s", exc)
        return EXIT_FAILED


def _run_content(connector: Connector) -> int:
    try:
        report = connector.run_full_traversal()
    finally:
        connector.close()
    for key in report.failed_keys:
        logger.warning("Item not indexed: %s", key)
    return EXIT_OK


def _run_identity(repository: IdentityRepository) -> int:
    try:
        users = repository.list_users()
        groups = repository.list_groups()
    finally:
        repository.close()

    for user in users:
        print(json.dumps({"type": "user", **asdict(user)}))
    for group in groups:
        print(
            json.dumps(
                {
                    "type": "group",
                    "group_name": group.group_name,
                    "member_emails": sorted(group.member_emails),
                }
            )
        )
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
