"""CLI for pushing generated descriptions to YouTube."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from common.config import load_config
from common.errors import FatalStageError
from publish_descriptions.helpers import parse_publish_descriptions_args
from publish_descriptions.publish_descriptions import list_pending, publish_descriptions

load_dotenv()

setup_logging()
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_publish_descriptions_args(argv)

    try:
        config = load_config(args.config)

        if args.list:
            pending = list_pending(config, video_id=args.video)
            if not pending:
                logger.info("No videos to update.")
                return
            logger.info("Found %d video(s) to update:", len(pending))
            for item in pending:
                logger.info("- %s (%s)", item.title, item.key)
            return

        summary = publish_descriptions(config, dry_run=args.dry_run, video_id=args.video)
    except FatalStageError as e:
        logger.error("Error: %s", e)
        raise SystemExit(1)

    if summary.failed:
        logger.warning("%d push(es) failed; they stay pending for the next run", summary.failed)


if __name__ == "__main__":
    main()
