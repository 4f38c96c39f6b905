"""Render the long-form MDX post for a video."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

PUB_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
PUBLISHED_FORMATS = ("%B %d, %Y", "%b %d, %Y", "%Y-%m-%d")


def parse_pub_date(value: Optional[str], now: Optional[datetime] = None) -> str:
    """Normalize the transcript's ``Published:`` value to ``YYYY-MM-DD HH:MM:SS``.

    Falls back to the current UTC time when the value is missing or unparseable.
    """
    now = now or datetime.now(timezone.utc)
    if not value:
        return now.strftime(PUB_DATE_FORMAT)

    value = value.strip()
    for fmt in PUBLISHED_FORMATS:
        try:
            return datetime.strptime(value, fmt).strftime(PUB_DATE_FORMAT)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime(PUB_DATE_FORMAT)
    except ValueError:
        logger.warning("Unparseable published date %r, using now", value)
        return now.strftime(PUB_DATE_FORMAT)


def build_frontmatter(
    title: str,
    description: str,
    pub_date: str,
    category: str,
    youtube_id: Optional[str] = None,
    project: Optional[str] = None,
    tags: Optional[list[str]] = None,
) -> dict[str, Any]:
    frontmatter: dict[str, Any] = {
        "title": title,
        "description": description,
        "pubDate": pub_date,
        "category": category,
    }
    if youtube_id:
        frontmatter["youtubeId"] = youtube_id
    if project:
        frontmatter["project"] = project
    if tags:
        frontmatter["tags"] = list(tags)
    return frontmatter


def render_post(frontmatter: dict[str, Any], body: str, embed_import: str = "") -> str:
    meta = yaml.safe_dump(
        frontmatter,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=None,
        width=10_000,
    )
    parts = ["---\n", meta, "---\n\n"]

    youtube_id = frontmatter.get("youtubeId")
    if youtube_id:
        if embed_import:
            parts.append(embed_import + "\n\n")
        title = str(frontmatter.get("title", "")).replace('"', "&quot;")
        parts.append(f'<YouTubeEmbed videoId="{youtube_id}" title="{title}" />\n\n')

    parts.append("## Transcript\n\n")
    parts.append(body)
    return "".join(parts)
