"""Data models shared across pipeline stages."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class SourceItem:
    """A published video as listed in the channel's uploads playlist."""
    video_id: str
    title: str
    published_at: Optional[datetime]
    description: str = ""

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"


@dataclass(frozen=True)
class TranscriptSegment:
    """One caption cue: text plus its offset and duration in seconds."""
    text: str
    start: float = 0.0
    duration: float = 0.0


@dataclass
class TranscriptDocument:
    """Fields recovered from a transcript artifact on disk."""
    title: str
    video_id: Optional[str]
    url: Optional[str]
    published: Optional[str]
    transcript: str
