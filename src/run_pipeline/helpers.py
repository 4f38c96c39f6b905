"""Helper functions for run_pipeline CLI."""

from __future__ import annotations

import argparse

from common.cli_helpers import add_config_argument, parse_positive_int


def parse_run_pipeline_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run every pipeline stage in order.")
    add_config_argument(parser)
    parser.add_argument("--max-videos", type=parse_positive_int, default=None)
    parser.add_argument("--skip-fetch", action="store_true", help="Work only from transcripts already on disk")
    parser.add_argument("--rewrite-model", default=None, help="OpenAI model for post rewriting (default: none)")
    parser.add_argument("--publish", action="store_true", help="Also push descriptions to YouTube")
    parser.add_argument("--dry-run", action="store_true", help="With --publish, skip the final update calls")
    return parser.parse_args(argv)
