"""Common CLI helper utilities."""

from __future__ import annotations

import argparse
import logging

from common.text import extract_video_id


def setup_logging() -> None:
    """Configure standard logging format for CLI tools."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def parse_video_id(value: str) -> str:
    """Parse a video id or YouTube URL for argparse arguments.

    Raises:
        argparse.ArgumentTypeError: If no video id can be extracted.
    """
    video_id = extract_video_id(value)
    if not video_id:
        raise argparse.ArgumentTypeError(f"could not extract a video id from {value!r}")
    return video_id


def parse_positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def add_config_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default=None,
        help="Config name under common/configs (default: $CONFIG_ENV or 'prod')",
    )
