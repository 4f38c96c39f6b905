"""Run the stages back to back, each feeding the next through the filesystem."""

from __future__ import annotations

import logging
from typing import Optional

from common.config import Config
from common.stage_runner import RunSummary
from fetch_transcripts.fetch_transcripts import fetch_transcripts
from generate_descriptions.generate_descriptions import generate_descriptions
from publish_descriptions.publish_descriptions import publish_descriptions
from transform_posts.transform_posts import transform_posts

logger = logging.getLogger(__name__)


def run_pipeline(
    config: Config,
    api_key: Optional[str] = None,
    channel_id: Optional[str] = None,
    max_videos: Optional[int] = None,
    skip_fetch: bool = False,
    publish: bool = False,
    dry_run: bool = False,
    rewrite_model: Optional[str] = None,
) -> dict[str, RunSummary]:
    """Run fetch, describe, transform and (optionally) publish.

    A fatal error in any stage stops the pipeline; later stages do not run.
    Per-item failures do not: each stage works with whatever the previous
    one managed to produce.
    """
    summaries: dict[str, RunSummary] = {}

    if skip_fetch:
        logger.info("Skipping transcript fetch")
    else:
        summaries["fetch-transcripts"] = fetch_transcripts(
            config, api_key=api_key, channel_id=channel_id, max_videos=max_videos,
        )

    summaries["generate-descriptions"] = generate_descriptions(config)
    summaries["transform-posts"] = transform_posts(config, rewrite_model=rewrite_model)

    if publish:
        summaries["publish-descriptions"] = publish_descriptions(config, dry_run=dry_run)

    for name, summary in summaries.items():
        logger.info(
            "%s: %d processed, %d skipped, %d unavailable, %d failed",
            name, summary.processed, summary.skipped, summary.unavailable, summary.failed,
        )
    return summaries
