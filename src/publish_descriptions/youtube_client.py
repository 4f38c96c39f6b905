"""Read-modify-write access to video metadata (OAuth, YouTube Data API v3)."""

from __future__ import annotations

import logging
from typing import Any, Optional

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from common.pacing import Pacer

logger = logging.getLogger(__name__)

# Snippet fields an update must echo back, or YouTube clears/rejects them.
PRESERVED_SNIPPET_FIELDS = ("title", "categoryId", "tags", "defaultLanguage", "defaultAudioLanguage")


def build_youtube_service(credentials: Credentials) -> Any:
    return build("youtube", "v3", credentials=credentials, cache_discovery=False)


def build_update_body(video_id: str, current_snippet: dict[str, Any], description: str) -> dict[str, Any]:
    """Snippet update that replaces the description and keeps the managed fields as they are."""
    snippet = {k: current_snippet[k] for k in PRESERVED_SNIPPET_FIELDS if k in current_snippet}
    snippet["description"] = description
    return {"id": video_id, "snippet": snippet}


class VideoMetadataClient:
    def __init__(self, youtube: Any, pacer: Optional[Pacer] = None):
        self.youtube = youtube
        self.pacer = pacer

    def _pace(self) -> None:
        if self.pacer is not None:
            self.pacer.wait()

    def get_snippet(self, video_id: str) -> Optional[dict[str, Any]]:
        """Current snippet for a video, or None if it is missing or not ours to see."""
        self._pace()
        response = self.youtube.videos().list(part="snippet", id=video_id).execute()
        items = response.get("items") or []
        if not items:
            return None
        return items[0]["snippet"]

    def update_description(self, video_id: str, description: str, dry_run: bool = False) -> Optional[dict[str, Any]]:
        """Replace a video's description, preserving the rest of its snippet.

        Returns the update body that was sent (or would have been, for a dry
        run), or None when the video could not be read.
        """
        current = self.get_snippet(video_id)
        if current is None:
            return None

        body = build_update_body(video_id, current, description)
        if dry_run:
            logger.debug("Dry run: not updating %s", video_id)
            return body

        self._pace()
        self.youtube.videos().update(part="snippet", body=body).execute()
        return body
