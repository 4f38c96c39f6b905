"""Keyword heuristics for video categories, hashtags and post tags."""

from __future__ import annotations

from typing import Optional

TUTORIAL_TITLE_KEYWORDS = ("how to", "tutorial", "recipe", "guide")
VLOG_TITLE_KEYWORDS = ("vlog", "rambl", "update", "day ")

# hashtag(s) -> keywords searched in the opening of the transcript (and title
# where noted). Order is priority order.
HASHTAG_RULES: list[tuple[tuple[str, ...], tuple[str, ...], bool]] = [
    (("warmachine",), ("warmachine", "crucible guard", "fifth division"), True),
    (("trenchcrusade",), ("trench crusade",), True),
    (("dolmenwood", "ttrpg"), ("dolmenwood",), True),
    (("warhammer",), ("warhammer", "40k", "old world"), False),
    (("speedpaint",), ("speed paint", "speedpaint", "contrast paint"), False),
    (("nmm",), ("nmm", "non-metal", "nonmetal"), False),
    (("drybrushing",), ("dry brush", "drybrush"), False),
    (("3dprinting",), ("3d print", "resin"), False),
    (("wargamingterrain",), ("terrain", "board"), False),
    (("airbrush",), ("airbrush",), False),
    (("orcsandgoblins",), ("goblin", "orc"), False),
]

POST_TAG_KEYWORDS: dict[str, tuple[str, ...]] = {
    "miniature painting": ("paint", "painting", "miniature", "mini", "brush", "airbrush"),
    "warhammer": ("warhammer", "40k", "age of sigmar", "ageofsigmar"),
    "terrain": ("terrain", "board", "tile", "scenery", "foam"),
    "3d printing": ("3d print", "resin", "stl", "printer"),
    "kitbashing": ("kitbash", "convert", "conversion"),
    "tutorials": ("how to", "tutorial", "recipe", "guide"),
    "orcs and goblins": ("orc", "goblin", "ork", "grot"),
    "trench crusade": ("trench crusade", "trench pilgrim", "communicant"),
    "necromunda": ("necromunda",),
    "warmachine": ("warmachine", "crucible guard"),
    "dolmenwood": ("dolmenwood",),
    "mage knight": ("mage knight",),
    "basing": ("base", "basing"),
    "weathering": ("rust", "weathering", "dirty down"),
    "oil wash": ("oil wash", "oil paint"),
    "nmm": ("nmm", "non-metal metallic", "nonmetal metallic"),
    "drybrushing": ("drybrush", "dry brush"),
    "glazing": ("glaze", "glazing"),
    "solo rpg": ("solo", "roleplaying", "rpg", "session 0"),
    "vlog": ("vlog", "ramble", "update"),
    "motivation": ("motivat", "struggle", "progress", "fail"),
    "one piece tcg": ("one piece", "tcg", "card game"),
}

POST_CATEGORIES = {"tutorial": "Tutorials", "vlog": "Vlogs"}

CONTENT_SAMPLE_CHARS = 2000


def categorize_video(
    title: str,
    transcript: str,
    base_tags: list[str] | tuple[str, ...] = (),
    default_category: str = "vlog",
) -> tuple[str, list[str]]:
    """Guess a category and hashtag candidates from the title and transcript.

    Returns tags in priority order, deduplicated; callers apply their own cap.
    """
    title_lower = title.lower()
    content_lower = transcript.lower()[:CONTENT_SAMPLE_CHARS]

    tags = list(base_tags)
    category = default_category

    if any(k in title_lower for k in TUTORIAL_TITLE_KEYWORDS):
        category = "tutorial"
        tags.append("hobbytutorial")

    # A vlog marker in the title wins over tutorial wording.
    if any(k in title_lower for k in VLOG_TITLE_KEYWORDS):
        category = "vlog"
        tags.append("hobbyvlog")

    for hashtags, keywords, check_title in HASHTAG_RULES:
        if any(k in content_lower for k in keywords) or (check_title and any(k in title_lower for k in keywords)):
            tags.extend(hashtags)

    return category, list(dict.fromkeys(tags))


def post_tags(title: str, transcript: str, max_tags: int = 5) -> list[str]:
    combined = f"{title} {transcript}".lower()
    tags = [tag for tag, keywords in POST_TAG_KEYWORDS.items() if any(k in combined for k in keywords)]
    return tags[:max_tags]


def post_category(title: str, transcript: str) -> str:
    category, _ = categorize_video(title, transcript)
    return POST_CATEGORIES.get(category, "Vlogs")


def find_project(title: str, transcript: str, projects: dict[str, str]) -> Optional[str]:
    """Return the slug of the first configured project whose keyword appears."""
    combined = f"{title} {transcript}".lower()
    for keyword, slug in projects.items():
        if keyword.lower() in combined:
            return slug
    return None
