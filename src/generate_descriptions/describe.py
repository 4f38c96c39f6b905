"""Build a YouTube description from a transcript."""

from __future__ import annotations

import re

LINK_DELIMITER = "---"


def normalize_hashtags(tags: list[str], limit: int = 3) -> list[str]:
    """Lower-case, strip whitespace and ``#``, drop duplicates and cap at ``limit``."""
    normalized = []
    for tag in tags:
        cleaned = re.sub(r"\s+", "", tag).lstrip("#").lower()
        if cleaned and cleaned not in normalized:
            normalized.append(cleaned)
    return normalized[:limit]


def generate_hook(title: str, category: str) -> str:
    """One-paragraph opener for the description."""
    clean_title = title.rstrip(".")

    if category == "tutorial":
        topic = re.sub(r"^how to\s+", "", clean_title.lower())
        return (
            f"Learn {topic} in this step-by-step hobby tutorial. "
            "Quick tips and techniques you can apply to your own miniatures today."
        )

    return (
        f"{clean_title} - Join me in today's hobby session as I share tips, progress, "
        "and thoughts on miniature painting and tabletop gaming."
    )


def render_description(hook: str, website: str, hashtags: list[str]) -> str:
    """Hook paragraph, delimited link block, then the hashtag line."""
    lines = [hook, ""]
    if website:
        lines += [LINK_DELIMITER, f"🌐 Website & Blog: {website}", LINK_DELIMITER, ""]
    lines.append(" ".join(f"#{tag}" for tag in hashtags))
    return "\n".join(lines) + "\n"
