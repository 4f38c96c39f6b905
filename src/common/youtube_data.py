"""Read-only client for the YouTube Data API v3 (API-key auth)."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Iterator

import requests

from common.errors import ChannelNotFoundError, YouTubeApiError
from common.models import SourceItem
from common.pacing import Pacer

logger = logging.getLogger(__name__)

API_BASE_URL = "https://www.googleapis.com/youtube/v3"
MAX_PAGE_SIZE = 50


def _parse_published_at(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        logger.warning("Unparseable publishedAt: %s", value)
        return None


def source_item_from_playlist_item(item: dict[str, Any]) -> SourceItem:
    """Build a SourceItem from a ``playlistItems`` resource (part=snippet)."""
    snippet = item["snippet"]
    return SourceItem(
        video_id=snippet["resourceId"]["videoId"],
        title=snippet.get("title", ""),
        published_at=_parse_published_at(snippet.get("publishedAt")),
        description=snippet.get("description", ""),
    )


class YouTubeDataClient:
    def __init__(
        self,
        api_key: str,
        session: requests.Session | None = None,
        timeout: int = 30,
        pacer: Pacer | None = None,
        base_url: str = API_BASE_URL,
    ):
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout
        self.pacer = pacer
        self.base_url = base_url

    def get(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        """GET ``endpoint`` with ``params`` and the API key; return decoded JSON.

        Raises:
            YouTubeApiError: On any non-2xx response.
        """
        if self.pacer is not None:
            self.pacer.wait()

        response = self.session.get(
            f"{self.base_url}/{endpoint}",
            params={**params, "key": self.api_key},
            timeout=self.timeout,
        )
        if not response.ok:
            try:
                error = response.json().get("error", response.text)
            except ValueError:
                error = response.text
            raise YouTubeApiError(response.status_code, error)
        return response.json()

    def get_uploads_playlist_id(self, channel_id: str) -> str:
        """Resolve a channel id to the id of its uploads playlist.

        Raises:
            ChannelNotFoundError: If the channel does not exist.
        """
        data = self.get("channels", {"part": "contentDetails", "id": channel_id})
        items = data.get("items") or []
        if not items:
            raise ChannelNotFoundError(channel_id)
        return items[0]["contentDetails"]["relatedPlaylists"]["uploads"]

    def iter_playlist_items(self, playlist_id: str, page_size: int = MAX_PAGE_SIZE) -> Iterator[SourceItem]:
        """Yield every video in a playlist, one page request at a time.

        Pages are only requested as the caller consumes items, so stopping
        early stops pagination.
        """
        page_token: str | None = None
        page_size = min(page_size, MAX_PAGE_SIZE)

        while True:
            params: dict[str, Any] = {
                "part": "snippet",
                "playlistId": playlist_id,
                "maxResults": page_size,
            }
            if page_token:
                params["pageToken"] = page_token

            data = self.get("playlistItems", params)
            for item in data.get("items", []):
                yield source_item_from_playlist_item(item)

            page_token = data.get("nextPageToken")
            if not page_token:
                return
