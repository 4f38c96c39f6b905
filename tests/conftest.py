"""Shared fixtures: a Config rooted in a temporary directory."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from common.config import Config, PathsConfig, YouTubeConfig
from common.models import SourceItem
from common.transcript_file import render_transcript, transcript_filename


@pytest.fixture
def config(tmp_path: Path) -> Config:
    paths = PathsConfig(
        transcripts_dir=str(tmp_path / "transcripts"),
        descriptions_dir=str(tmp_path / "descriptions"),
        posts_dir=str(tmp_path / "blog-posts"),
        credentials_dir=str(tmp_path / "credentials"),
        token_path=str(tmp_path / "youtube_tokens.json"),
        transcripts_ledger=str(tmp_path / "downloaded.json"),
        descriptions_ledger=str(tmp_path / "descriptions_processed.json"),
        posts_ledger=str(tmp_path / "posts_processed.json"),
        publish_ledger=str(tmp_path / "descriptions_pushed.json"),
    )
    youtube = YouTubeConfig(read_delay_seconds=0, write_delay_seconds=0)
    return Config(paths=paths, youtube=youtube)


@pytest.fixture
def write_transcript(config: Config):
    """Write a transcript artifact into the configured transcripts dir."""

    def _write(video_id: str, title: str, body: str = "Some words about painting.") -> Path:
        video = SourceItem(
            video_id=video_id,
            title=title,
            published_at=datetime(2024, 3, 5, 12, 0, tzinfo=timezone.utc),
        )
        path = Path(config.paths.transcripts_dir) / transcript_filename(title)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_transcript(video, body), encoding="utf-8")
        return path

    return _write
