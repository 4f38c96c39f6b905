"""CLI for downloading channel transcripts."""

from __future__ import annotations

import logging

import requests
from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from common.config import load_config, require_env
from common.errors import FatalStageError, YouTubeApiError
from fetch_transcripts.fetch_transcripts import fetch_transcripts
from fetch_transcripts.helpers import parse_fetch_transcripts_args

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_fetch_transcripts_args(argv)

    try:
        config = load_config(args.config)
        summary = fetch_transcripts(
            config,
            api_key=require_env("YOUTUBE_API_KEY"),
            channel_id=require_env("YOUTUBE_CHANNEL_ID"),
            max_videos=args.max_videos,
            video_id=args.video,
            with_timestamps=args.timestamps,
        )
    except FatalStageError as e:
        logger.error("Error: %s", e)
        raise SystemExit(1)
    except (YouTubeApiError, requests.RequestException) as e:
        logger.error("Could not read the channel catalog: %s", e)
        raise SystemExit(1)

    if summary.failed:
        logger.warning("%d video(s) failed; they will be retried on the next run", summary.failed)


if __name__ == "__main__":
    main()
