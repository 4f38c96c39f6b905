"""CLI for generating video descriptions."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from common.config import load_config
from common.errors import FatalStageError
from generate_descriptions.generate_descriptions import generate_descriptions
from generate_descriptions.helpers import parse_generate_descriptions_args

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_generate_descriptions_args(argv)

    try:
        config = load_config(args.config)
        generate_descriptions(config)
    except FatalStageError as e:
        logger.error("Error: %s", e)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
