"""Helper functions for generate_descriptions CLI."""

from __future__ import annotations

import argparse

from common.cli_helpers import add_config_argument


def parse_generate_descriptions_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate YouTube descriptions from transcripts.")
    add_config_argument(parser)
    return parser.parse_args(argv)
