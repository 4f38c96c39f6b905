"""Read and write the markdown transcript artifact.

Layout::

    # <title>

    - **Video ID:** <id>
    - **URL:** [Watch on YouTube](<url>)
    - **Published:** <Month D, YYYY>

    ## Transcript

    <body>
"""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from common.models import SourceItem, TranscriptDocument, TranscriptSegment
from common.text import sanitize_filename

TRANSCRIPT_MARKER = "## Transcript"
TRANSCRIPT_SUFFIX = ".md"

_VIDEO_ID_RE = re.compile(r"\*\*Video ID:\*\*\s*(\S+)")
_URL_RE = re.compile(r"\*\*URL:\*\*\s*\[.*?\]\((.*?)\)")
_PUBLISHED_RE = re.compile(r"\*\*Published:\*\*\s*(.+)")


def format_published(value: Optional[datetime]) -> str:
    if value is None:
        return "Unknown"
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def format_timestamp(seconds: float) -> str:
    seconds = max(0, int(seconds))
    return f"[{seconds // 60:02d}:{seconds % 60:02d}]"


def format_plain(segments: Iterable[TranscriptSegment]) -> str:
    return " ".join(segment.text for segment in segments)


def format_with_timestamps(segments: Iterable[TranscriptSegment]) -> str:
    return "\n".join(f"{format_timestamp(s.start)} {s.text}" for s in segments)


def transcript_filename(title: str) -> str:
    return sanitize_filename(title) + TRANSCRIPT_SUFFIX


def render_transcript(video: SourceItem, body: str) -> str:
    return "\n".join([
        f"# {video.title}",
        "",
        f"- **Video ID:** {video.video_id}",
        f"- **URL:** [Watch on YouTube]({video.url})",
        f"- **Published:** {format_published(video.published_at)}",
        "",
        TRANSCRIPT_MARKER,
        "",
        body,
    ])


def parse_transcript(content: str) -> TranscriptDocument:
    """Recover header fields and the body from a transcript artifact.

    Missing header lines come back as None; a missing marker gives an empty body.
    """
    first_line = content.split("\n", 1)[0]
    title = re.sub(r"^#\s*", "", first_line).strip() or "Unknown"

    video_id = _VIDEO_ID_RE.search(content)
    url = _URL_RE.search(content)
    published = _PUBLISHED_RE.search(content)

    start = content.find(TRANSCRIPT_MARKER)
    body = content[start + len(TRANSCRIPT_MARKER):].strip() if start != -1 else ""

    return TranscriptDocument(
        title=title,
        video_id=video_id.group(1) if video_id else None,
        url=url.group(1) if url else None,
        published=published.group(1).strip() if published else None,
        transcript=body,
    )


def read_transcript(path: Path) -> TranscriptDocument:
    return parse_transcript(Path(path).read_text(encoding="utf-8"))
