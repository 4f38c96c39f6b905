"""Stage 2: turn downloaded transcripts into YouTube descriptions."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from common.catalog import CatalogItem, CatalogSource, DirectoryCatalogSource
from common.config import Config
from common.ledger import Ledger, load_file_ledger
from common.stage_runner import Artifact, ArtifactStore, Outcome, Processed, RunSummary, StageRunner, Unavailable
from common.tagging import categorize_video
from common.text import decode_html_entities
from common.transcript_file import TRANSCRIPT_SUFFIX, read_transcript
from generate_descriptions.describe import generate_hook, normalize_hashtags, render_description

logger = logging.getLogger(__name__)

STAGE_NAME = "generate-descriptions"
LEDGER_DESCRIPTION = "Tracks which transcripts have been processed into YouTube descriptions"
DESCRIPTION_SUFFIX = "_description.txt"


def description_filename(transcript_filename: str) -> str:
    return Path(transcript_filename).stem + DESCRIPTION_SUFFIX


def make_processor(config: Config) -> Callable[[CatalogItem], Outcome]:
    settings = config.descriptions
    website = config.channel.website

    def process(item: CatalogItem) -> Outcome:
        document = read_transcript(item.data)
        title = decode_html_entities(document.title)
        transcript = decode_html_entities(document.transcript)
        if not transcript.strip():
            return Unavailable("Transcript body is empty")

        category, candidates = categorize_video(
            title, transcript, settings.base_tags, settings.default_category,
        )
        hashtags = normalize_hashtags(candidates, settings.max_hashtags)
        content = render_description(generate_hook(title, category), website, hashtags)
        filename = description_filename(item.key)

        return Processed(
            record={"descriptionFile": filename, "category": category, "tags": hashtags},
            artifact=Artifact(filename, content),
            status=f"wrote {filename}",
        )

    return process


def build_describe_stage(
    config: Config,
    catalog: Optional[CatalogSource] = None,
    ledger: Optional[Ledger] = None,
) -> StageRunner:
    descriptions_dir = Path(config.paths.descriptions_dir)
    if catalog is None:
        catalog = DirectoryCatalogSource(config.paths.transcripts_dir, TRANSCRIPT_SUFFIX)
    if ledger is None:
        ledger = load_file_ledger(config.paths.descriptions_ledger, LEDGER_DESCRIPTION)

    return StageRunner(
        name=STAGE_NAME,
        ledger=ledger,
        catalog=catalog,
        process=make_processor(config),
        artifacts=ArtifactStore(descriptions_dir),
        summary_path=descriptions_dir / "_summary.json",
    )


def generate_descriptions(config: Config) -> RunSummary:
    return build_describe_stage(config).run()
