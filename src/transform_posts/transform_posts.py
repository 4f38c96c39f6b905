"""Stage 3: turn transcripts into long-form blog posts (MDX with frontmatter)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from common.catalog import CatalogItem, CatalogSource, DirectoryCatalogSource
from common.config import Config
from common.ledger import Ledger, load_file_ledger
from common.stage_runner import Artifact, ArtifactStore, Outcome, Processed, RunSummary, StageRunner, Unavailable
from common.tagging import find_project, post_category, post_tags
from common.text import collapse_whitespace, decode_html_entities, slugify, truncate_at_word
from common.transcript_file import TRANSCRIPT_SUFFIX, read_transcript
from transform_posts.post import build_frontmatter, parse_pub_date, render_post
from transform_posts.rewrite import rewrite_transcript

logger = logging.getLogger(__name__)

STAGE_NAME = "transform-posts"
LEDGER_DESCRIPTION = "Tracks which transcripts have been converted into blog posts"
POST_SUFFIX = ".mdx"

Rewriter = Callable[[str, str], str]


def post_filename(title: str, fallback: str) -> str:
    return (slugify(title) or slugify(fallback) or fallback) + POST_SUFFIX


def make_processor(config: Config, rewriter: Optional[Rewriter] = None) -> Callable[[CatalogItem], Outcome]:
    settings = config.posts

    def process(item: CatalogItem) -> Outcome:
        document = read_transcript(item.data)
        title = decode_html_entities(document.title)
        transcript = decode_html_entities(document.transcript)
        if not transcript.strip():
            return Unavailable("Transcript body is empty")

        tags = post_tags(title, transcript, settings.max_tags)
        category = post_category(title, transcript)
        frontmatter = build_frontmatter(
            title=title,
            description=truncate_at_word(transcript, settings.description_length),
            pub_date=parse_pub_date(document.published),
            category=category,
            youtube_id=document.video_id,
            project=find_project(title, transcript, settings.projects),
            tags=tags,
        )

        body = rewriter(title, transcript) if rewriter else collapse_whitespace(transcript)
        filename = post_filename(title, document.video_id or Path(item.key).stem)

        return Processed(
            record={
                "postFile": filename,
                "youtubeId": document.video_id,
                "category": category,
                "tags": tags,
            },
            artifact=Artifact(filename, render_post(frontmatter, body, settings.embed_import)),
            status=f"wrote {filename}",
        )

    return process


def build_transform_stage(
    config: Config,
    catalog: Optional[CatalogSource] = None,
    ledger: Optional[Ledger] = None,
    rewriter: Optional[Rewriter] = None,
) -> StageRunner:
    posts_dir = Path(config.paths.posts_dir)
    if catalog is None:
        catalog = DirectoryCatalogSource(config.paths.transcripts_dir, TRANSCRIPT_SUFFIX)
    if ledger is None:
        ledger = load_file_ledger(config.paths.posts_ledger, LEDGER_DESCRIPTION)

    return StageRunner(
        name=STAGE_NAME,
        ledger=ledger,
        catalog=catalog,
        process=make_processor(config, rewriter),
        artifacts=ArtifactStore(posts_dir),
        summary_path=posts_dir / "_summary.json",
    )


def transform_posts(config: Config, rewrite_model: Optional[str] = None) -> RunSummary:
    rewriter = None
    if rewrite_model:
        def rewriter(title: str, transcript: str) -> str:
            return rewrite_transcript(title, transcript, model=rewrite_model)

    return build_transform_stage(config, rewriter=rewriter).run()
