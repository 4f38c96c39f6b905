"""Data models for publish_descriptions pipeline stage."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class PublishCandidate:
    """A transcript with a generated description waiting to be pushed."""
    video_id: str
    title: str
    transcript_file: str
    description_file: str
    description_path: Path
