"""CLI for running the whole transcript pipeline."""

from __future__ import annotations

import logging

import requests
from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from common.config import load_config, require_env
from common.errors import FatalStageError, YouTubeApiError
from run_pipeline.helpers import parse_run_pipeline_args
from run_pipeline.run_pipeline import run_pipeline

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_run_pipeline_args(argv)

    try:
        config = load_config(args.config)
        api_key = channel_id = None
        if not args.skip_fetch:
            api_key = require_env("YOUTUBE_API_KEY")
            channel_id = require_env("YOUTUBE_CHANNEL_ID")
        if args.rewrite_model:
            require_env("OPENAI_API_KEY")

        run_pipeline(
            config,
            api_key=api_key,
            channel_id=channel_id,
            max_videos=args.max_videos,
            skip_fetch=args.skip_fetch,
            publish=args.publish,
            dry_run=args.dry_run,
            rewrite_model=args.rewrite_model,
        )
    except FatalStageError as e:
        logger.error("Error: %s", e)
        raise SystemExit(1)
    except (YouTubeApiError, requests.RequestException) as e:
        logger.error("Could not read the channel catalog: %s", e)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
