"""Stage 1: download transcripts for every video on the channel."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from common.catalog import CatalogItem, CatalogSource, FilteredCatalogSource, PlaylistCatalogSource
from common.config import Config
from common.ledger import Ledger, load_file_ledger
from common.models import SourceItem
from common.pacing import Pacer
from common.stage_runner import Artifact, ArtifactStore, Outcome, Processed, RunSummary, StageRunner, Unavailable
from common.transcript_file import format_plain, format_with_timestamps, render_transcript, transcript_filename
from common.youtube_data import YouTubeDataClient
from fetch_transcripts.transcripts import TranscriptFetcher

logger = logging.getLogger(__name__)

STAGE_NAME = "fetch-transcripts"
LEDGER_DESCRIPTION = "Tracks which videos have had their transcripts downloaded"


def make_processor(
    fetcher: TranscriptFetcher,
    with_timestamps: bool = False,
) -> Callable[[CatalogItem], Outcome]:
    """Build the per-video step: fetch captions and render the markdown artifact."""

    def process(item: CatalogItem) -> Outcome:
        video: SourceItem = item.data
        segments = fetcher.fetch(video.video_id)
        if not segments:
            return Unavailable("No transcript available")

        body = format_with_timestamps(segments) if with_timestamps else format_plain(segments)
        filename = transcript_filename(video.title)

        return Processed(
            record={"title": video.title, "filename": filename},
            artifact=Artifact(filename, render_transcript(video, body)),
            status="saved transcript",
        )

    return process


def build_fetch_stage(
    config: Config,
    catalog: CatalogSource,
    fetcher: TranscriptFetcher,
    ledger: Optional[Ledger] = None,
    with_timestamps: bool = False,
    force_keys: tuple[str, ...] = (),
    extras: Optional[dict] = None,
) -> StageRunner:
    transcripts_dir = Path(config.paths.transcripts_dir)
    if ledger is None:
        ledger = load_file_ledger(config.paths.transcripts_ledger, LEDGER_DESCRIPTION)

    return StageRunner(
        name=STAGE_NAME,
        ledger=ledger,
        catalog=catalog,
        process=make_processor(fetcher, with_timestamps),
        artifacts=ArtifactStore(transcripts_dir),
        summary_path=transcripts_dir / "_summary.json",
        force_keys=force_keys,
        extras=extras,
    )


def fetch_transcripts(
    config: Config,
    api_key: str,
    channel_id: str,
    max_videos: Optional[int] = None,
    video_id: Optional[str] = None,
    with_timestamps: bool = False,
) -> RunSummary:
    """Run the fetch stage against the live YouTube APIs.

    With ``video_id`` only that upload is considered and the ledger check is
    bypassed for it.
    """
    yt = config.youtube
    client = YouTubeDataClient(api_key, timeout=yt.request_timeout)
    catalog: CatalogSource = PlaylistCatalogSource(
        client, channel_id, max_items=max_videos, page_size=yt.page_size,
    )
    force_keys: tuple[str, ...] = ()
    if video_id:
        catalog = FilteredCatalogSource(catalog, [video_id])
        force_keys = (video_id,)

    fetcher = TranscriptFetcher(
        pacer=Pacer(yt.read_delay_seconds),
        languages=yt.transcript_languages,
    )
    stage = build_fetch_stage(
        config,
        catalog,
        fetcher,
        with_timestamps=with_timestamps,
        force_keys=force_keys,
        extras={"channel_id": channel_id},
    )
    summary = stage.run()
    logger.info("Transcripts saved to: %s/", config.paths.transcripts_dir)
    logger.info("Download log saved to: %s", config.paths.transcripts_ledger)
    return summary
