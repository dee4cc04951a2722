"""CLI entrypoint for GitHub label sync.

    github-label-sync list   -r "<org>/<repo>"
    github-label-sync update -r "<org>/<repo>" [-f labels.json] [-a]
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import NoReturn

from pydantic import ValidationError

from github_label_sync import __version__
from github_label_sync.config import LabelSyncSettings
from github_label_sync.errors import LabelFileError, LabelSyncError
from github_label_sync.github.client import GitHubClient
from github_label_sync.labels import read_labels
from github_label_sync.lister import list_labels
from github_label_sync.logging import configure_logging
from github_label_sync.updater import BulkUpdater

logger = logging.getLogger(__name__)

DEFAULT_LABEL_FILE = "default.json"


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="github-label-sync",
        description="List or bulk-update the labels of a GitHub repository",
    )
    parser.add_argument(
        "--version", action="version", version=f"github-label-sync {__version__}"
    )

    subparsers = parser.add_subparsers(
        dest="command", required=True, parser_class=_ArgumentParser
    )

    list_cmd = subparsers.add_parser("list", help="Print the repository labels as JSON")
    list_cmd.add_argument(
        "-r",
        "--repo",
        dest="repository",
        required=True,
        help="Repository in the form 'org/repo'",
    )

    update_cmd = subparsers.add_parser(
        "update", help="Update repository labels from a JSON label file"
    )
    update_cmd.add_argument(
        "-r",
        "--repo",
        dest="repository",
        required=True,
        help="Repository in the form 'org/repo'",
    )
    update_cmd.add_argument(
        "-f",
        "--file",
        default=DEFAULT_LABEL_FILE,
        help=(
            "JSON file with labels; pass an empty string to read stdin "
            f"(default {DEFAULT_LABEL_FILE!r})"
        ),
    )
    update_cmd.add_argument(
        "-a",
        "--add",
        dest="allow_create",
        action="store_true",
        help="Create a label if it doesn't exist",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = LabelSyncSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment or .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 1

    configure_logging(settings.log_level)

    if args.command == "update":
        # Input errors are fatal before any request is made.
        try:
            labels = read_labels(args.file, sys.stdin)
        except LabelFileError as e:
            logger.debug("Unable to load labels", extra={"file": args.file}, exc_info=True)
            print(f"error: {e}", file=sys.stderr)
            return 1

    with GitHubClient(
        token=settings.github_token,
        base_url=settings.github_base_url,
        timeout=settings.request_timeout,
    ) as github:
        try:
            if args.command == "list":
                list_labels(github, args.repository, sys.stdout)
                return 0

            if args.command == "update":
                updater = BulkUpdater(github, sys.stdout, max_workers=settings.max_workers)
                updater.update(args.repository, labels, allow_create=args.allow_create)
                return 0

        except (LabelSyncError, ValueError) as e:
            logger.debug("Command failed", extra={"command": args.command}, exc_info=True)
            print(f"error: {e}", file=sys.stderr)
            return 1

    logger.error("Unknown command", extra={"command": args.command})
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
