"""Helper functions for transform_posts CLI."""

from __future__ import annotations

import argparse

from common.cli_helpers import add_config_argument


def parse_transform_posts_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Convert transcripts into MDX blog posts.")
    add_config_argument(parser)
    parser.add_argument(
        "--rewrite-model",
        default=None,
        help="OpenAI model used to clean up the transcript body (default: no rewrite)",
    )
    return parser.parse_args(argv)
