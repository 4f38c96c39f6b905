"""Text helpers for titles, filenames and transcript bodies."""

import html
import re
from typing import Optional

_VIDEO_ID_PATTERNS = [
    re.compile(r"(?:youtube\.com/watch\?(?:.*&)?v=|youtu\.be/|youtube\.com/embed/|youtube\.com/shorts/)([A-Za-z0-9_-]{11})"),
    re.compile(r"^([A-Za-z0-9_-]{11})$"),
]


def decode_html_entities(text: str) -> str:
    """Decode HTML entities, including double-escaped ones like ``&amp;#39;``."""
    # Caption feeds sometimes escape twice.
    for _ in range(3):
        decoded = html.unescape(text)
        if decoded == text:
            break
        text = decoded
    return text


def collapse_whitespace(text: Optional[str]) -> str:
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def sanitize_filename(name: str, max_length: int = 100) -> str:
    """Make a title safe to use as a filename.

    Drops characters reserved on common filesystems and replaces runs of
    whitespace with underscores.
    """
    name = re.sub(r'[<>:"/\\|?*]', "", name)
    name = re.sub(r"\s+", "_", name)
    return name[:max_length]


def slugify(title: str, max_length: int = 80) -> str:
    """Convert a title to a URL-friendly slug."""
    slug = title.lower()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")[:max_length]


def truncate_at_word(text: str, max_length: int = 160) -> str:
    """Shorten text for previews, preferring to break on a nearby space."""
    cleaned = collapse_whitespace(text)
    if len(cleaned) <= max_length:
        return cleaned

    shortened = cleaned[:max_length]
    last_space = shortened.rfind(" ")
    if last_space > max_length - 30:
        shortened = shortened[:last_space]
    return shortened + "..."


def extract_video_id(value: str) -> Optional[str]:
    """Pull an 11-character video id out of a bare id or a watch/short/embed URL."""
    value = value.strip()
    for pattern in _VIDEO_ID_PATTERNS:
        match = pattern.search(value)
        if match:
            return match.group(1)
    return None
