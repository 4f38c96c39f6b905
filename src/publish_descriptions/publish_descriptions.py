"""Stage 4: push generated descriptions back to YouTube.

Pushes are at-least-once. The ledger entry is written only after the update
call returns. If the process dies between the two, the next run repeats the
update. That is harmless because the write replaces the same field with the
same text.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Optional

from googleapiclient.errors import HttpError

from common.catalog import CatalogItem, CatalogSource, DirectoryCatalogSource, FilteredCatalogSource
from common.config import Config
from common.ledger import Ledger, load_file_ledger
from common.pacing import Pacer
from common.stage_runner import Outcome, Processed, RunSummary, StageRunner, Unavailable
from common.transcript_file import TRANSCRIPT_SUFFIX, read_transcript
from generate_descriptions.generate_descriptions import description_filename
from publish_descriptions.credentials import CredentialManager
from publish_descriptions.models import PublishCandidate
from publish_descriptions.youtube_client import VideoMetadataClient, build_youtube_service

logger = logging.getLogger(__name__)

STAGE_NAME = "publish-descriptions"
LEDGER_DESCRIPTION = "Tracks which descriptions have been pushed to YouTube"


def make_candidate_loader(descriptions_dir: str | Path) -> Callable[[Path], Optional[CatalogItem]]:
    """Map a transcript file to a publish candidate keyed by video id.

    Transcripts without a video id, or without a generated description yet,
    are left out of the catalog.
    """
    descriptions_dir = Path(descriptions_dir)

    def to_item(path: Path) -> Optional[CatalogItem]:
        try:
            document = read_transcript(path)
        except (OSError, ValueError) as e:
            logger.warning("Skipping unreadable transcript %s: %s", path.name, e)
            return None
        if not document.video_id:
            logger.debug("No video id in %s", path.name)
            return None

        description_file = description_filename(path.name)
        description_path = descriptions_dir / description_file
        if not description_path.exists():
            logger.warning("Warning: No description file for %s", path.name)
            return None

        candidate = PublishCandidate(
            video_id=document.video_id,
            title=document.title,
            transcript_file=path.name,
            description_file=description_file,
            description_path=description_path,
        )
        return CatalogItem(key=document.video_id, title=document.title, data=candidate)

    return to_item


def build_publish_catalog(config: Config, video_id: Optional[str] = None) -> CatalogSource:
    catalog: CatalogSource = DirectoryCatalogSource(
        config.paths.transcripts_dir,
        TRANSCRIPT_SUFFIX,
        to_item=make_candidate_loader(config.paths.descriptions_dir),
    )
    if video_id:
        catalog = FilteredCatalogSource(catalog, [video_id])
    return catalog


def list_pending(config: Config, video_id: Optional[str] = None, ledger: Optional[Ledger] = None) -> list[CatalogItem]:
    """Candidates that a real run would push. Needs no credentials."""
    if ledger is None:
        ledger = load_file_ledger(config.paths.publish_ledger, LEDGER_DESCRIPTION)
    return [
        item for item in build_publish_catalog(config, video_id).items()
        if video_id or not ledger.has(item.key)
    ]


def make_processor(client: VideoMetadataClient, dry_run: bool = False) -> Callable[[CatalogItem], Outcome]:
    def process(item: CatalogItem) -> Outcome:
        candidate: PublishCandidate = item.data
        description = candidate.description_path.read_text(encoding="utf-8")

        try:
            body = client.update_description(candidate.video_id, description, dry_run=dry_run)
        except HttpError as e:
            logger.error("  Details: %s", _http_error_details(e))
            raise

        if body is None:
            return Unavailable(f"Video {candidate.video_id} not found or not accessible")

        return Processed(
            record={
                "title": candidate.title,
                "transcript": candidate.transcript_file,
                "descriptionFile": candidate.description_file,
            },
            persist=not dry_run,
            status="SUCCESS",
        )

    return process


def _http_error_details(error: HttpError) -> Any:
    content = getattr(error, "content", b"")
    if isinstance(content, bytes):
        return content.decode("utf-8", errors="replace")
    return content


def build_publish_stage(
    config: Config,
    client: VideoMetadataClient,
    catalog: Optional[CatalogSource] = None,
    ledger: Optional[Ledger] = None,
    dry_run: bool = False,
    video_id: Optional[str] = None,
) -> StageRunner:
    if catalog is None:
        catalog = build_publish_catalog(config, video_id)
    if ledger is None:
        ledger = load_file_ledger(config.paths.publish_ledger, LEDGER_DESCRIPTION)

    return StageRunner(
        name=STAGE_NAME,
        ledger=ledger,
        catalog=catalog,
        process=make_processor(client, dry_run=dry_run),
        force_keys=(video_id,) if video_id else (),
        extras={"dry_run": dry_run},
    )


def publish_descriptions(
    config: Config,
    dry_run: bool = False,
    video_id: Optional[str] = None,
    credential_manager: Optional[CredentialManager] = None,
    youtube: Any = None,
) -> RunSummary:
    """Push pending descriptions.

    Credentials are checked before the catalog is read: a missing token or
    client secret raises ``MissingCredentialsError`` and nothing is enumerated.
    """
    if dry_run:
        logger.info("DRY RUN MODE - No changes will be made")

    if youtube is None:
        manager = credential_manager or CredentialManager.from_config(config)
        youtube = build_youtube_service(manager.credentials())

    client = VideoMetadataClient(youtube, pacer=Pacer(config.youtube.write_delay_seconds))
    return build_publish_stage(config, client, dry_run=dry_run, video_id=video_id).run()
