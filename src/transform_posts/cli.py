"""CLI for converting transcripts into blog posts."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from common.config import load_config, require_env
from common.errors import FatalStageError
from transform_posts.helpers import parse_transform_posts_args
from transform_posts.transform_posts import transform_posts

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_transform_posts_args(argv)

    try:
        config = load_config(args.config)
        if args.rewrite_model:
            require_env("OPENAI_API_KEY")
        transform_posts(config, rewrite_model=args.rewrite_model)
    except FatalStageError as e:
        logger.error("Error: %s", e)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
