"""Helper functions for fetch_transcripts CLI."""

from __future__ import annotations

import argparse

from common.cli_helpers import add_config_argument, parse_positive_int, parse_video_id


def parse_fetch_transcripts_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments for fetch_transcripts."""

    parser = argparse.ArgumentParser(description="Download transcripts for a channel's uploads.")
    add_config_argument(parser)
    parser.add_argument(
        "--max-videos",
        type=parse_positive_int,
        default=None,
        help="Only consider the N most recent uploads (default: all)",
    )
    parser.add_argument(
        "--video",
        type=parse_video_id,
        default=None,
        help="Fetch a single video (id or URL), even if it was downloaded before",
    )
    parser.add_argument(
        "--timestamps",
        action="store_true",
        help="Write one [MM:SS]-prefixed line per caption instead of a single paragraph",
    )
    return parser.parse_args(argv)
