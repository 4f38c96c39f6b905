"""Helper functions for publish_descriptions CLI."""

from __future__ import annotations

import argparse

from common.cli_helpers import add_config_argument, parse_video_id


def parse_publish_descriptions_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for publish_descriptions."""

    parser = argparse.ArgumentParser(description="Update YouTube video descriptions from generated files.")
    add_config_argument(parser)
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Do everything except the final update; the ledger is not advanced",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List videos that would be updated and exit",
    )
    parser.add_argument(
        "--video",
        type=parse_video_id,
        default=None,
        help="Push a single video, even if it was pushed before",
    )
    return parser.parse_args(argv)
